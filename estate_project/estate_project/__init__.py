# Celery instance is defined in estate_project/celery.py
# It points the celery_app object to Django settings
from .celery import celery_app

# 'from estate_project import *', only exports celery_app
__all__ = ("celery_app",)

""" When you run Celery workers, "celery -A estate_project worker -l info"
    the -A flag imports estate_project/__init__.py,
    which exposes celery_app. """
