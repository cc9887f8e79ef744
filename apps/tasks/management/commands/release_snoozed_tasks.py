from django.core.management.base import BaseCommand
from apps.core.domain.dates import local_today, parse_date
from apps.tasks.adapters.orm_repositories import DjangoTaskRepository
from apps.tasks.domain.services import TaskService


class Command(BaseCommand):
    help = 'Przywraca do listy otwartych zadania, których uśpienie minęło'

    def add_arguments(self, parser):
        parser.add_argument('--date', help='Dzień odniesienia (YYYY-MM-DD), domyślnie dzisiaj')

    def handle(self, *args, **options):
        today = parse_date(options['date']) if options['date'] else local_today()

        service = TaskService(DjangoTaskRepository())
        released = service.release_elapsed_snoozes(today)

        self.stdout.write(self.style.SUCCESS(f'Wybudzono {released} uśpionych zadań.'))
