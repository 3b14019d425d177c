"""adonice entry point.

Commands: get-<key> / set-<key> <value> for the persisted settings, and
run to draft (and optionally submit) a pull request for the current
branch. Usage: adonice run -t main -p "Mention the migration".
"""

import argparse
import logging
import sys
from pathlib import Path

from adonice import __version__
from adonice.adapters import AzureDevOpsAdapter, GitPlatformError
from adonice.agents import OpenAIAgent
from adonice.agents.prompts import DEFAULT_USER_INPUT
from adonice.config import (
    CONFIG_KEYS,
    DEFAULT_CONFIG_PATH,
    DEFAULT_ENV_FILE,
    AppConfig,
    ConfigStore,
    MissingConfigError,
    load_config,
    require_settings,
)
from adonice.logging import AdoniceLogging
from adonice.review.editor import resolve_editor
from adonice.services.pipeline import PipelineError, run_pipeline


def build_parser() -> argparse.ArgumentParser:
    """Parser with get-*/set-* commands per config key and the run command."""
    parser = argparse.ArgumentParser(
        prog="adonice",
        description="CLI for PR automation and config management",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=DEFAULT_CONFIG_PATH,
        help="Path to YAML config file",
    )
    parser.add_argument(
        "--env-file",
        type=Path,
        default=DEFAULT_ENV_FILE,
        help="Path to the .env file holding saved settings",
    )
    sub = parser.add_subparsers(dest="command", metavar="<command>")
    sub.required = True

    for key, label in CONFIG_KEYS.items():
        get_cmd = sub.add_parser(f"get-{key.lower()}", help=f"Get {label}")
        get_cmd.set_defaults(key=key, action="get")
        set_cmd = sub.add_parser(f"set-{key.lower()}", help=f"Set {label}")
        set_cmd.add_argument("value", help=label)
        set_cmd.set_defaults(key=key, action="set")

    run_cmd = sub.add_parser("run", help="Run the PR agent")
    run_cmd.add_argument("-t", "--target", default=None, help="Target branch (overrides config)")
    run_cmd.add_argument("-p", "--prompt", default=DEFAULT_USER_INPUT, help="User input prompt for PR generation")
    run_cmd.set_defaults(action="run")
    return parser


def _missing_config_hint(missing: list[str]) -> str:
    commands = ", ".join(f"`adonice set-{key.lower()}`" for key in missing)
    return f"Variables can be set with {commands}."


def run_command(
    config: AppConfig,
    store: ConfigStore,
    target: str | None,
    prompt: str,
    log: logging.Logger,
) -> int:
    """Resolve settings, build agent and adapter, run the pipeline."""
    try:
        settings = require_settings(store)
    except MissingConfigError as e:
        log.error("%s", e)
        log.error("%s", _missing_config_hint(e.missing))
        return 1

    agent = OpenAIAgent(
        api_key=settings.api_key,
        model=config.openai.model,
        max_tokens=config.openai.max_tokens,
        base_url=config.openai.base_url,
    )
    adapter = AzureDevOpsAdapter(
        token=settings.pat,
        api_version=config.azure.api_version,
        timeout=config.azure.request_timeout,
    )
    try:
        run_pipeline(
            settings,
            agent,
            adapter,
            user_input=prompt,
            target_branch=target,
            editor=resolve_editor(config.editor.command),
            fallback_target_branch=config.azure.fallback_target_branch,
            log=log,
        )
    except (PipelineError, GitPlatformError) as e:
        log.error("%s", e)
        return 1
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point: dispatch to get/set/run."""
    args = build_parser().parse_args(argv)

    config = load_config(args.config)
    logs = AdoniceLogging(config.logging)
    logs.setup()
    log = logs.get_logger("cli")
    store = ConfigStore(args.env_file, log=logs.get_logger("config"))

    if args.action == "get":
        value = store.get(args.key)
        if value:
            print(f"{args.key} = {value}")
        else:
            print(f"{args.key} is not set.")
        return 0

    if args.action == "set":
        store.set(args.key, args.value)
        return 0

    try:
        return run_command(config, store, args.target, args.prompt, log)
    except KeyboardInterrupt:
        return 1
    except Exception as e:
        log.exception("Failed to run agent: %s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
