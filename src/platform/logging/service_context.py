"""
Service context for log lines.

Identifies which process wrote a line when several API workers share one log stream.
"""

import os
from functools import lru_cache


@lru_cache(maxsize=1)
def get_service_context() -> str:
    service_name = os.getenv('SERVICE_NAME', 'party-booking')
    deploy_env = os.getenv('DEPLOY_ENV', 'local_dev')
    worker = os.getenv('HOSTNAME') or str(os.getpid())
    return f'{service_name}@{deploy_env}:{worker}'
