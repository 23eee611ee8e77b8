"""
ASGI config for chartdesk project.

It exposes the ASGI callable as a module-level variable named ``application``.
"""

import os
from django.core.asgi import get_asgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "chartdesk.settings")

application = get_asgi_application()

from chartdesk.utils.chartdesk_logger import setup_logger  # pylint: disable=wrong-import-position

setup_logger()
