"""
Service identification attached to every log line.

Format: {SERVICE_NAME}@{DEPLOY_ENV}:{host}/{pid}
"""

import os
import socket
from functools import lru_cache


@lru_cache(maxsize=1)
def get_service_context() -> str:
    service_name = os.getenv('SERVICE_NAME', 'cinema-booking')
    deploy_env = os.getenv('DEPLOY_ENV', 'local_dev')
    # Containers expose a short random hostname, enough to tell replicas apart
    host = socket.gethostname().split('.')[0] or 'local'
    return f'{service_name}@{deploy_env}:{host}/{os.getpid()}'
