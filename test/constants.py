# Test Utility Constants

# Test Passwords
DEFAULT_PASSWORD = 'P@ssw0rd'

# Test Emails
TEST_EMAIL = 'test@example.com'
TEST_ADMIN_EMAIL = 'admin@test.com'
TEST_CUSTOMER_EMAIL = 'customer@test.com'
ANOTHER_CUSTOMER_EMAIL = 'another_customer@test.com'

# Test Names
TEST_ADMIN_NAME = 'Test Admin'
TEST_CUSTOMER_NAME = 'Test Customer'
ANOTHER_CUSTOMER_NAME = 'Another Customer'

# Movie test constants
DEFAULT_MOVIE = {
    'title': 'The Grand Premiere',
    'description': 'A story about a cinema that never closes its doors.',
    'genre': ['Drama', 'Comedy'],
    'duration': 120,
    'rating': 8.1,
    'poster': 'https://example.com/poster.jpg',
    'director': 'Jane Doe',
    'cast': ['Actor One', 'Actor Two'],
    'release_date': '2025-01-01',
    'language': 'English',
    'featured': True,
}

DEFAULT_SHOWTIME_PRICE = 12.5
