import argparse
import asyncio


class Command:
    """
    Base class for management commands run through ``scripts.py``.

    Subclasses set ``help``, declare options in ``add_arguments`` and do
    their work in the async ``handle``.
    """

    help = ""

    def __init__(self, name: str):
        self.name = name

    def add_arguments(self, parser: argparse.ArgumentParser):
        pass

    def create_parser(self) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(prog=f"scripts.py {self.name}", description=self.help)
        self.add_arguments(parser)
        return parser

    async def handle(self, **options):
        raise NotImplementedError("Commands must implement handle()")

    def run_from_argv(self, argv: list[str]):
        options = vars(self.create_parser().parse_args(argv))
        return asyncio.run(self.handle(**options))
