"""
Service identification stamped on every log line.

Format: ``{service_name}@{deploy_env}:{instance}``. The instance is the
container hostname when running in a container, otherwise the local PID.
"""

import os
from functools import lru_cache


@lru_cache(maxsize=1)
def get_service_context() -> str:
    service_name = os.getenv('SERVICE_NAME', 'tickethub-storefront')
    deploy_env = os.getenv('DEPLOY_ENV', 'local_dev')

    instance = os.getenv('HOSTNAME', '')
    if instance:
        instance = instance[:12]
    else:
        instance = str(os.getpid())

    return f'{service_name}@{deploy_env}:{instance}'
