from django.core.management.base import BaseCommand, CommandError

from apps.pairs.exceptions import ServiceUnavailable
from apps.pairs.services import pair_service


class Command(BaseCommand):
    help = "Recalculate and save profit/loss for every settled pair."

    def handle(self, *args, **options):
        try:
            result = pair_service.recalculate_all_profit_loss()
        except ServiceUnavailable as e:
            raise CommandError(e.message) from e

        style = self.style.SUCCESS if result.error_count == 0 else self.style.WARNING
        self.stdout.write(
            style(
                f"Recalculation finished. Processed: {result.total_processed}, "
                f"succeeded: {result.success_count}, failed: {result.error_count}."
            )
        )
