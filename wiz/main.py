"""Entry point: validates input, runs the wizard, triggers the formatter."""

import asyncio
import logging
import signal
import sys

from wiz.config import get_config
from wiz.services.http import HttpWizardService
from wiz.services.local import LocalWizardService
from wiz.state import GeneratedActor, WizardSuggestion
from wiz.utils.formatter import write_workflow
from wiz.utils.validator import validate_input
from wiz.wizard import WorkflowWizard


def configure_logging(level: str | None = None) -> None:
    config = get_config()
    logging.basicConfig(
        level=(level or config.get("log_level", "WARNING")).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _print_progress(completed: int, total: int, actors: list[GeneratedActor]) -> None:
    print(f"[WIZ] Batch {completed}/{total} — {len(actors)} actors generated")


def _print_step(step: str) -> None:
    print(f"[WIZ] {step.capitalize()}...")


async def run(query: str, url: str | None = None, output_path: str | None = None) -> WizardSuggestion | None:
    """Run the wizard on one request and write the result.

    Args:
        query: The user's free-text request.
        url: Base URL of a deployed generation service. None runs in-process.
        output_path: Where to write the workflow JSON. None uses config.
    """
    validated = validate_input(query)
    services = HttpWizardService(base_url=url) if url else LocalWizardService()

    selected: list[WizardSuggestion] = []
    wizard = WorkflowWizard(
        services,
        selected.append,
        on_progress=_print_progress,
        on_step=_print_step,
    )

    loop = asyncio.get_running_loop()
    try:
        loop.add_signal_handler(signal.SIGINT, wizard.cancel)
        handles_sigint = True
    except NotImplementedError:
        # No loop signal handlers on this platform; Ctrl+C interrupts instead of cancelling.
        handles_sigint = False

    try:
        suggestion = await wizard.submit(validated)
    finally:
        if handles_sigint:
            loop.remove_signal_handler(signal.SIGINT)
        if isinstance(services, HttpWizardService):
            await services.aclose()

    if wizard.step == "idle":
        print("[WIZ] Cancelled.")
        return None
    if wizard.step == "error":
        print(f"[WIZ] Error: {wizard.error}", file=sys.stderr)
        return None

    path = write_workflow(suggestion, intent=wizard.intent, output_path=output_path)
    print(f"[WIZ] Nodes: {len(suggestion['nodes'])}, connections: {len(suggestion['connections'])}")
    print(f"[WIZ] Output written to: {path}")
    return suggestion


def main() -> None:
    """CLI entry point — accepts the request as arguments or from stdin."""
    args = sys.argv[1:]
    url = output_path = None

    for flag in ("--url", "--output"):
        if flag in args:
            i = args.index(flag)
            if i + 1 >= len(args):
                print(f"{flag} needs a value.", file=sys.stderr)
                sys.exit(2)
            value = args[i + 1]
            del args[i:i + 2]
            if flag == "--url":
                url = value
            else:
                output_path = value

    if args:
        query = " ".join(args)
    else:
        print("Describe the workflow you want (Ctrl+D / Ctrl+Z to submit):")
        query = sys.stdin.read()

    configure_logging()
    suggestion = asyncio.run(run(query, url=url, output_path=output_path))
    if suggestion is None:
        sys.exit(1)


if __name__ == "__main__":
    main()
