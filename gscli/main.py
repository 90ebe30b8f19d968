import sys, typing

import rich.markup

from .common  import GSException
from .printer import cons


def run_command(command, argv: typing.Optional[typing.List[str]] = None) -> int:
    """
    Run command on argv (default: sys.argv[1:]) and return the exit status.

    0 on success, 1 for a reported error, 2 for an unexpected exception.
    """
    if argv is None:
        argv = sys.argv[1:]

    cons.verbose = command.config.debug
    cons.debug(f"config: {command.config}")

    try:
        command.run(argv)
    except GSException as exc:
        cons.reset()
        cons.print(f"[bold red]Error[/bold red]: {rich.markup.escape(str(exc))}", highlight=False)
        return 1
    except KeyboardInterrupt:
        return 130
    except Exception as exc:
        cons.reset()
        cons.print_exception()
        cons.print(f"[bold red]ERROR[/bold red]: An unexpected exception occurred: {rich.markup.escape(str(exc))}")
        return 2

    return 0
