#!/usr/bin/env python3
"""Run the built-in test cases of registered modules and print a summary."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Any

# Ensure project root is on sys.path when script is executed directly.
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from dipstik.core.config import get_settings  # noqa: E402
from dipstik.core.framework.exceptions import UnknownModuleError  # noqa: E402
from dipstik.core.framework.registry import ModuleRegistry  # noqa: E402
from dipstik.core.logging_config import configure_logging  # noqa: E402
from dipstik.core.modules import build_module_registry  # noqa: E402


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "module_ids",
        nargs="*",
        metavar="module_id",
        help="Modules to test (default: every registered module)",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="Print registered module ids and exit",
    )
    return parser.parse_args(argv)


def print_summary(module_id: str, summary: dict[str, Any]) -> None:
    print(f"\n=== {module_id} ===")
    for result in summary["results"]:
        mark = "PASS" if result["success"] else "FAIL"
        line = f"  [{mark}] {result['name']} ({result.get('executionTimeMs', 0):.3f} ms)"
        if not result["success"]:
            line += f": {result.get('error')}"
        print(line)
    print(
        f"  total={summary['total']} passed={summary['passed']} failed={summary['failed']} "
        f"success_rate={summary['successRate']:.1f}% "
        f"avg_time={summary['averageExecutionTime']:.3f} ms"
    )


async def run(registry: ModuleRegistry, module_ids: list[str]) -> int:
    failed = 0
    for module_id in module_ids:
        try:
            summary = await registry.run_module_tests(module_id)
        except UnknownModuleError as exc:
            print(f"\n=== {module_id} ===\n  {exc}")
            failed += 1
            continue
        print_summary(module_id, summary)
        failed += summary["failed"]
    return 1 if failed else 0


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv if argv is not None else sys.argv[1:])
    settings = get_settings()
    configure_logging(settings.log_level)
    logging.getLogger("dipstik").setLevel(logging.WARNING)

    registry = build_module_registry(settings)
    if args.list:
        for module_id in registry.modules:
            print(module_id)
        return 0

    module_ids = args.module_ids or list(registry.modules)
    return asyncio.run(run(registry, module_ids))


if __name__ == "__main__":
    raise SystemExit(main())
