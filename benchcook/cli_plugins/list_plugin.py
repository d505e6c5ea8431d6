from .base import SubcommandPlugin
from benchcook.lib.loader_lib import load_tree


class ListPlugin(SubcommandPlugin):
    def get_name(self):
        return "list"

    def get_order(self):
        return 10

    def get_parser(self, subparsers):
        parser = subparsers.add_parser("list", help="List workloads and days found in the benchmark logs")
        self.add_common_arguments(parser)
        parser.set_defaults(_plugin=self)
        return parser

    def get_epilog(self):
        return """
List Commands:
  benchcook list                          List workloads, days and run counts under ./data
  benchcook list --data-dir runs          List workloads under ./runs"""

    def run(self, args):
        config = self.resolve_config(args)
        self.list_workloads(config.data_dir)

    @staticmethod
    def format_store(store):
        """Return one line per workload followed by an indented line per day."""
        lines = []
        for workload in sorted(store, key=lambda w: w.name):
            lines.append(f"{workload.name} ({workload.run_count()} runs)")
            for day in sorted(workload.days):
                lines.append(f"  {day}: {len(workload.days[day])} runs")
        return lines

    def list_workloads(self, data_dir):
        store, _ = load_tree(data_dir)
        if not len(store):
            print(f"No benchmark runs found under {data_dir}")
            return
        for line in self.format_store(store):
            print(line)
