import logging
import sys

from .base import SubcommandPlugin
from benchcook.lib.cook_lib import cook
from benchcook.lib.loader_lib import load_tree, write_report

log = logging.getLogger(__name__)


class CookPlugin(SubcommandPlugin):
    def get_name(self):
        return "cook"

    def get_parser(self, subparsers):
        parser = subparsers.add_parser("cook", help="Aggregate benchmark logs into a JSON report")
        self.add_common_arguments(parser)
        parser.add_argument("--output", help="Path of the JSON report to write (default: data.js)")
        parser.add_argument("-j", "--jobs", type=int, help="Number of worker processes used to parse logs (default: 1)")
        parser.set_defaults(_plugin=self)
        return parser

    def get_epilog(self):
        return """
Cook Commands:
  benchcook cook                          Cook ./data into ./data.js
  benchcook cook --data-dir runs -j 4     Cook ./runs using 4 worker processes
  benchcook cook --config bench.ini       Take defaults from the [cook] section of bench.ini"""

    def run(self, args):
        config = self.resolve_config(args)
        self.cook_logs(config.data_dir, config.output, config.jobs)

    def cook_logs(self, data_dir, output, jobs=1):
        store, results = load_tree(data_dir, jobs=jobs)

        matched = sum(r.matched for r in results)
        mismatched = sum(r.mismatched for r in results)
        unreadable = sum(1 for r in results if not r.succeeded)
        log.info(
            f"Loaded {len(results)} files: {matched} runs, {mismatched} malformed lines, "
            f"{unreadable} unreadable files, {len(store)} workloads"
        )

        report = cook(store)
        try:
            write_report(report, output)
        except (TypeError, ValueError) as e:
            log.error(f"Could not serialize report: {e}")
            sys.exit(1)
        except OSError as e:
            log.error(f"Could not write {output}: {e}")
            sys.exit(1)
        return report
