from __future__ import annotations

import argparse
import os
import subprocess
import sys
from pathlib import Path

from pattern_framework.demo.singleton_demo import run_demo
from pattern_framework.utils.config_loader import PROJECT_ROOT
from pattern_framework.utils.logger import get_logger

log = get_logger()


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Design pattern WebDriver test runner")
    parser.add_argument("--demo", action="store_true", help="run the singleton console demo only")
    parser.add_argument("--browser", choices=["chrome", "firefox", "edge"], default=None)
    parser.add_argument("--headless", action="store_true")
    parser.add_argument("--remote", action="store_true", help="run on Selenium Grid")
    parser.add_argument("--grid-url", default=None)
    parser.add_argument("--unit-only", action="store_true", help="skip tests that need a browser")
    parser.add_argument("pytest_args", nargs="*", help="extra arguments passed to pytest")
    return parser.parse_args(argv)


def _build_pytest_cmd(args: argparse.Namespace) -> list[str]:
    """
    中文：根据命令行参数组装 pytest 命令。
    参数:
        args: 解析后的命令行参数。
    """

    cmd = [sys.executable, "-m", "pytest", "-q"]
    if not args.unit_only:
        cmd.append("--run-browser")
    if args.browser:
        cmd += ["--browser", args.browser]
    if args.headless:
        cmd.append("--headless")
    if args.remote:
        cmd.append("--remote")
    if args.grid_url:
        cmd += ["--grid-url", args.grid_url]
    cmd += args.pytest_args
    return cmd


def main(argv: list[str] | None = None) -> int:
    """
    中文：主入口，运行单例演示或启动 pytest。
    参数:
        argv: 命令行参数，为空则读取 sys.argv。
    """

    args = _parse_args(argv)

    if args.demo:
        return 0 if run_demo() else 1

    cmd = _build_pytest_cmd(args)
    log.info("[RUN] %s", " ".join(cmd))
    completed = subprocess.run(cmd, cwd=str(Path(PROJECT_ROOT)), env=os.environ.copy())
    return completed.returncode


if __name__ == "__main__":
    raise SystemExit(main())
