# plateformes/management/commands/reconcile_balances.py

from __future__ import annotations

from django.core.management.base import BaseCommand

from plateformes.models import Plateforme
from plateformes.services.ledger import reconcile_plateforme


class Command(BaseCommand):
    help = "Compare each platform balance with its ledger journal (optionally fix drift)."

    def add_arguments(self, parser):
        parser.add_argument(
            "--plateforme",
            dest="plateforme_id",
            type=int,
            help="Only check this platform id (optional)",
        )
        parser.add_argument(
            "--fix",
            action="store_true",
            help="Reset drifted balances to the journal value.",
        )
        parser.add_argument(
            "--strict",
            action="store_true",
            help="Fail (non-zero exit) if any unfixed drift is found.",
        )

    def handle(self, *args, **options):
        plateforme_id = options.get("plateforme_id")
        fix = bool(options.get("fix"))
        strict = bool(options.get("strict"))

        qs = Plateforme.objects.order_by("id")
        if plateforme_id is not None:
            qs = qs.filter(pk=plateforme_id)
            if not qs.exists():
                self.stderr.write(self.style.ERROR(f"Plateforme {plateforme_id} not found"))
                return self._exit(strict)

        self.stdout.write(self.style.MIGRATE_HEADING("Platform balance reconciliation"))
        self.stdout.write(f"Mode: {'FIX' if fix else 'REPORT'}")
        self.stdout.write("")

        checked = 0
        drifted = 0
        unfixed = 0

        for plateforme in qs.iterator():
            report = reconcile_plateforme(plateforme, fix=fix)
            checked += 1

            line = (
                f"#{report['plateforme_id']} {report['nom']}: "
                f"balance={report['balance']} ledger={report['ledger_balance']} "
                f"historical={report['historical_balance']}"
            )

            if report["drift"] == 0:
                self.stdout.write(self.style.SUCCESS(f"[OK] {line}"))
                continue

            drifted += 1
            if report["fixed"]:
                self.stdout.write(
                    self.style.WARNING(f"[FIXED] {line} drift={report['drift']}")
                )
            else:
                unfixed += 1
                self.stderr.write(self.style.ERROR(f"[DRIFT] {line} drift={report['drift']}"))

        self.stdout.write("")
        self.stdout.write(f"Platforms checked: {checked}")
        if drifted == 0:
            self.stdout.write(self.style.SUCCESS("✅ ALL BALANCES MATCH THE JOURNAL"))
        elif unfixed == 0:
            self.stdout.write(self.style.WARNING(f"Drift corrected on {drifted} platform(s)"))
        else:
            self.stderr.write(self.style.ERROR(f"❌ DRIFT FOUND ON {unfixed} PLATFORM(S)"))

        return self._exit(strict and unfixed > 0)

    def _exit(self, fail: bool):
        if fail:
            raise SystemExit(1)
        return None
