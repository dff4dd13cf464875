"""Test configuration and shared fixtures."""

import django
import pytest
from django.conf import settings

if not settings.configured:
    settings.configure(
        DEBUG=False,
        SECRET_KEY='dashboard-builder-tests',
        ALLOWED_HOSTS=['testserver'],
        DATABASES={
            'default': {
                'ENGINE': 'django.db.backends.sqlite3',
                'NAME': ':memory:',
            }
        },
        INSTALLED_APPS=[
            'django.contrib.auth',
            'django.contrib.contenttypes',
            'rest_framework',
            'dashboard_builder',
        ],
        ROOT_URLCONF='dashboard_builder.urls',
        PASSWORD_HASHERS=['django.contrib.auth.hashers.MD5PasswordHasher'],
        USE_TZ=True,
        REST_FRAMEWORK={
            'DEFAULT_RENDERER_CLASSES': ['rest_framework.renderers.JSONRenderer'],
            'DEFAULT_PARSER_CLASSES': ['rest_framework.parsers.JSONParser'],
        },
        DASHBOARD_BUILDER={},
    )
    django.setup()


@pytest.fixture(scope='session', autouse=True)
def django_db_schema():
    from django.core.management import call_command

    call_command('migrate', run_syncdb=True, verbosity=0)


@pytest.fixture
def db():
    """Run a test inside a transaction that is rolled back afterwards."""
    from django.db import transaction

    with transaction.atomic():
        yield
        transaction.set_rollback(True)


@pytest.fixture
def user(db):
    from django.contrib.auth import get_user_model

    return get_user_model().objects.create_user(username='alice', password='secret')


@pytest.fixture
def other_user(db):
    from django.contrib.auth import get_user_model

    return get_user_model().objects.create_user(username='bob', password='secret')


@pytest.fixture
def data_sources():
    from dashboard_builder.data_sources import StaticDataSourceProvider

    return StaticDataSourceProvider()


@pytest.fixture
def registry():
    from dashboard_builder.core import build_default_registry

    return build_default_registry()


@pytest.fixture
def clock():
    """Deterministic clock for component ids: 1000.000, 1000.001, ..."""
    ticks = iter(range(10 ** 6))
    return lambda: 1000 + next(ticks) / 1000


@pytest.fixture
def store(registry, clock):
    from dashboard_builder.core import LayoutStore

    return LayoutStore(registry=registry, clock=clock)
