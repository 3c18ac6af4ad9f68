"""
CLI / GitHub Action entry point. Wires the pipeline: config -> event payload -> story sync.
"""

import argparse
import json
import logging
import os
import sys
from typing import Any, Dict, Optional

from config import ActionConfig, INPUT_FIELDS
from errors import ShortcutSyncError
from ingest.github import GitHubClient
from ingest.shortcut import ShortcutClient
from storage.cache import Cache
from sync.stories import StorySynchronizer

logger = logging.getLogger(__name__)

# logging level -> GitHub Actions workflow command
_WORKFLOW_COMMANDS = {
    logging.DEBUG: '::debug::',
    logging.WARNING: '::warning::',
    logging.ERROR: '::error::',
    logging.CRITICAL: '::error::',
}


class WorkflowCommandFormatter(logging.Formatter):
    """Render records as GitHub Actions workflow commands so warnings and errors become run annotations."""

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        prefix = _WORKFLOW_COMMANDS.get(record.levelno, '')
        if prefix:
            # workflow commands are single-line; encode newlines the way the runner expects
            message = message.replace('%', '%25').replace('\r', '%0D').replace('\n', '%0A')
        return prefix + message


def configure_logging(debug: bool = False):
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(WorkflowCommandFormatter('%(message)s'))
    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(logging.DEBUG if debug else logging.INFO)


def _load_event(path: str) -> Dict[str, Any]:
    if not path:
        raise ShortcutSyncError("GITHUB_EVENT_PATH environment variable (or --event-path) is required")
    try:
        with open(path, 'r', encoding='utf-8') as fh:
            return json.load(fh)
    except (OSError, ValueError) as exc:
        raise ShortcutSyncError(f"Failed to read GitHub event payload {path}: {exc}") from exc


def _input_overrides(args) -> Dict[str, Optional[str]]:
    """Collect CLI flag values keyed by action input name."""
    overrides = {}
    for name in INPUT_FIELDS:
        value = getattr(args, name.replace('-', '_'), None)
        if value is not None:
            overrides[name] = str(value)
    return overrides


def run_pipeline(config: ActionConfig, event_name: str, payload: Dict[str, Any], cache: Optional[Cache] = None) -> Optional[str]:
    """Execute the sync for one event and return the linked story id, if any."""
    shortcut = ShortcutClient(config.shortcut_token)
    github = GitHubClient(config.github_token)
    synchronizer = StorySynchronizer(config, shortcut, github, cache=cache)
    return synchronizer.handle_event(event_name, payload)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Link pull requests to Shortcut stories")
    parser.add_argument("--event-name", type=str, default=None, help="GitHub event name (defaults to env GITHUB_EVENT_NAME)")
    parser.add_argument("--event-path", type=str, default=None, help="Path to the event payload JSON (defaults to env GITHUB_EVENT_PATH)")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging (also enabled by env RUNNER_DEBUG=1)")
    # every action input can be overridden from the command line, e.g. --project-name
    for name in INPUT_FIELDS:
        parser.add_argument(f"--{name}", dest=name.replace('-', '_'), type=str, default=None, help=f"Overrides action input {name}")
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(debug=args.debug or os.getenv('RUNNER_DEBUG') == '1')

    try:
        config = ActionConfig.from_env(overrides=_input_overrides(args))
        payload = _load_event(args.event_path or os.getenv('GITHUB_EVENT_PATH', ''))
        event_name = args.event_name or os.getenv('GITHUB_EVENT_NAME', '')
        with Cache() as cache:
            story_id = run_pipeline(config, event_name, payload, cache=cache)
    except ShortcutSyncError as exc:
        logger.error(str(exc))
        return 1

    if story_id:
        logger.info("Shortcut story: %s", story_id)
    return 0


if __name__ == "__main__":
    sys.exit(main())
