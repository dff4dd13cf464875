from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError

from dashboard_builder.core import BuilderSession
from dashboard_builder.data_sources import get_data_source_provider
from dashboard_builder.services.orm import OrmDashboardRepository


class Command(BaseCommand):
    help = 'Create a demo dashboard with one component of each type'

    def add_arguments(self, parser):
        parser.add_argument('--username', default='demo_user', help='Owner of the demo dashboard')
        parser.add_argument('--public', action='store_true', help='Make the dashboard public')

    def handle(self, *args, **options):
        User = get_user_model()

        user, created = User.objects.get_or_create(
            username=options['username'],
            defaults={'email': f"{options['username']}@example.com"}
        )
        if created:
            user.set_password('demo123')
            user.save()
            self.stdout.write(self.style.SUCCESS(f"Created demo user: {user.username}"))

        session = BuilderSession(OrmDashboardRepository(user), data_sources=get_data_source_provider())
        session.open()
        session.title = "Membership Overview"
        session.description = "Demo dashboard created by create_demo_dashboard"
        session.is_public = options['public']

        store = session.store
        store.add('metric')
        session.editor().apply(store, 'title', 'Active Members')
        session.editor().apply(store, 'metric.label', 'Active Members')
        session.editor().apply(store, 'metric.value', '1250')
        session.editor().apply(store, 'metric.change', '4.5')

        store.add('chart')
        session.editor().apply(store, 'title', 'Fees by Membership Status')
        session.editor().apply(store, 'aggregation', 'sum')

        store.add('table')
        session.editor().apply(store, 'title', 'Organizations')

        store.add('text')
        session.editor().apply(store, 'content', 'Figures are refreshed nightly.')

        result = session.save()
        if not result.success:
            raise CommandError(f"Failed to create demo dashboard: {result.error or result.errors}")

        self.stdout.write(self.style.SUCCESS(
            f"Created demo dashboard {result.dashboard_id} with {len(store)} components"
        ))
