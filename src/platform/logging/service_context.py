"""
Service context attached to every log line.

Identifies the service, deployment environment and process so that log lines
from several API instances sharing one database can be told apart.
"""

import os
from functools import lru_cache
import socket


@lru_cache(maxsize=1)
def get_service_context() -> str:
    service_name = os.getenv('SERVICE_NAME', 'seat-inventory')
    deploy_env = os.getenv('DEPLOY_ENV', 'local_dev')

    instance = os.getenv('INSTANCE_ID', '')
    if not instance:
        # Container hostnames are short ids; locally fall back to the pid
        instance = socket.gethostname()[:12] if deploy_env != 'local_dev' else str(os.getpid())

    return f'{service_name}@{deploy_env}:{instance}'
