"""loads a dbt manifest and prints what it contains"""

from django.core.management.base import BaseCommand, CommandError

from chartdesk.dbt.manifest import (
    ManifestLoadError,
    get_target_dir,
    load_manifest,
    summarize_manifest,
)
from chartdesk.utils.chartdesk_logger import setup_logger


class Command(BaseCommand):
    """
    This script reads manifest.json from a dbt target directory and
    prints the models and sources it describes
    """

    help = "Loads a dbt manifest.json and prints a summary of it"

    def add_arguments(self, parser):  # skipcq: PYL-R0201
        parser.add_argument("--target-dir", help="directory containing manifest.json")
        parser.add_argument("--project-dir", help="dbt project directory; reads target-path")

    def handle(self, *args, **options):
        setup_logger()

        if options["target_dir"]:
            target_dir = options["target_dir"]
        elif options["project_dir"]:
            target_dir = get_target_dir(options["project_dir"])
        else:
            raise CommandError("one of --target-dir or --project-dir is required")

        try:
            manifest = load_manifest(target_dir)
        except ManifestLoadError as err:
            raise CommandError(str(err)) from err

        summary = summarize_manifest(manifest)
        print(f"dbt version: {summary['dbt_version'] or 'unknown'}")
        for resource_type, count in sorted(summary["resource_types"].items()):
            print(f"  {resource_type:20} {count}")
        print(f"  {'source':20} {summary['sources']}")
        print("Models:")
        for model_name in summary["models"]:
            print(f"  {model_name}")
