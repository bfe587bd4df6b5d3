# donors/management/commands/watch_requests.py
"""
Django management command that keeps a donor's candidate list fresh
Usage: python manage.py watch_requests <donor_id> [--interval 5] [--runs N]
"""
import argparse

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from algorithms.eligibility import days_remaining, is_on_cooldown
from algorithms.exceptions import RecordNotFound
from bloodlink.polling import RecurringTask
from donors.services import candidate_requests, get_donor


def positive_int(value):
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


class Command(BaseCommand):
    help = 'Poll the blood requests a donor can fulfil and print them'

    def add_arguments(self, parser):
        parser.add_argument('donor_id', type=int, help='DonorProfile id')
        parser.add_argument(
            '--interval',
            type=float,
            default=settings.BLOODLINK['POLL_INTERVAL_SECONDS'],
            help='Seconds between refreshes',
        )
        parser.add_argument('--runs', type=positive_int, default=None, help='Stop after this many refreshes')

    def handle(self, *args, **options):
        donor_id = options['donor_id']
        try:
            donor = get_donor(donor_id)
        except RecordNotFound as e:
            raise CommandError(str(e))

        self.stdout.write(self.style.WARNING(
            f'Watching requests for {donor.name} ({donor.blood_group}, {donor.city}) '
            f'every {options["interval"]}s'
        ))

        def refresh():
            current = get_donor(donor_id)
            if is_on_cooldown(current):
                self.stdout.write(self.style.WARNING(
                    f'On cooldown: can accept again in {days_remaining(current)} day(s)'
                ))
            candidates = candidate_requests(donor_id)
            self.stdout.write(f'{len(candidates)} matching request(s)')
            for blood_request in candidates:
                self.stdout.write(
                    f'  #{blood_request.id} {blood_request.urgency_level:<16} '
                    f'{blood_request.blood_group:<3} x{blood_request.units_needed} '
                    f'{blood_request.hospital_name}'
                )

        task = RecurringTask(refresh, options['interval'], name=f'watch-donor-{donor_id}')
        try:
            task.run(max_runs=options['runs'])
        except KeyboardInterrupt:
            self.stdout.write('Stopped')
        finally:
            task.cancel()
