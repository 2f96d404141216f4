# API Route Constants

# Base API
API_BASE = '/api'

# User routes
USER_BASE = f'{API_BASE}/user'
USER_CREATE = USER_BASE
USER_LOGIN = f'{USER_BASE}/login'
USER_ME = USER_BASE

# Movie routes
MOVIE_BASE = f'{API_BASE}/movie'
MOVIE_CREATE = MOVIE_BASE
MOVIE_LIST = MOVIE_BASE
MOVIE_GET = f'{MOVIE_BASE}/{{movie_id}}'
MOVIE_UPDATE = f'{MOVIE_BASE}/{{movie_id}}'
MOVIE_DELETE = f'{MOVIE_BASE}/{{movie_id}}'
SHOWTIME_CREATE = f'{MOVIE_BASE}/{{movie_id}}/showtime'
SHOWTIME_UPDATE = f'{MOVIE_BASE}/{{movie_id}}/showtime/{{showtime_id}}'
SHOWTIME_DELETE = f'{MOVIE_BASE}/{{movie_id}}/showtime/{{showtime_id}}'

# Booking routes
BOOKING_BASE = f'{API_BASE}/booking'
BOOKING_CREATE = BOOKING_BASE
BOOKING_MY_BOOKINGS = BOOKING_BASE
BOOKING_GET = f'{BOOKING_BASE}/{{booking_id}}'
BOOKING_CANCEL = f'{BOOKING_BASE}/{{booking_id}}/cancel'
BOOKING_GET_BY_CODE = f'{BOOKING_BASE}/code/{{code}}'

# Admin routes
ADMIN_BASE = f'{API_BASE}/admin'
ADMIN_BOOKING_LIST = f'{ADMIN_BASE}/booking'
ADMIN_BOOKING_STATUS = f'{ADMIN_BASE}/booking/{{booking_id}}/status'
ADMIN_USER_LIST = f'{ADMIN_BASE}/user'
ADMIN_USER_DETAIL = f'{ADMIN_BASE}/user/{{user_id}}'
