#!/usr/bin/env python3
"""
Evaluation runner for the Huffman prefix-code modules.

This evaluation script:
- Runs pytest on the tests/ folder against the modules at the project root
- Collects individual test results with pass/fail status
- Writes a structured JSON report with environment metadata

Run with:
    python evaluation/evaluation.py [--output PATH]
"""
import os
import sys
import json
import uuid
import platform
import subprocess
from datetime import datetime
from pathlib import Path

from loguru import logger

PROJECT_ROOT = Path(__file__).resolve().parent.parent
STATUS_WORDS = {
    " PASSED": "passed",
    " FAILED": "failed",
    " ERROR": "error",
    " SKIPPED": "skipped",
}


def generate_run_id():
    """Generate a short unique run ID."""
    return uuid.uuid4().hex[:8]


def get_git_info():
    """Get git commit and branch information."""
    git_info = {"git_commit": "unknown", "git_branch": "unknown"}
    commands = {
        "git_commit": ["git", "rev-parse", "HEAD"],
        "git_branch": ["git", "rev-parse", "--abbrev-ref", "HEAD"],
    }
    for key, cmd in commands.items():
        try:
            result = subprocess.run(cmd, capture_output=True, text=True, timeout=5, cwd=str(PROJECT_ROOT))
        except (OSError, subprocess.SubprocessError) as e:
            logger.debug(f"[Evaluation] {' '.join(cmd)} unavailable: {e}")
            continue
        if result.returncode == 0:
            value = result.stdout.strip()
            git_info[key] = value[:8] if key == "git_commit" else value
    return git_info


def get_environment_info():
    """Collect environment information for the report."""
    git_info = get_git_info()

    return {
        "python_version": platform.python_version(),
        "platform": platform.platform(),
        "os": platform.system(),
        "os_release": platform.release(),
        "architecture": platform.machine(),
        "hostname": platform.node(),
        "git_commit": git_info["git_commit"],
        "git_branch": git_info["git_branch"],
    }


def parse_pytest_verbose_output(output):
    """Parse pytest verbose output to extract test results."""
    tests = []
    for line in output.split('\n'):
        line_stripped = line.strip()

        # Match lines like: tests/test_core.py::test_single_symbol_code PASSED
        if '::' not in line_stripped:
            continue
        for status_word, outcome in STATUS_WORDS.items():
            if status_word in line_stripped:
                nodeid = line_stripped.split(status_word)[0].strip()
                tests.append({
                    "nodeid": nodeid,
                    "name": nodeid.split("::")[-1],
                    "outcome": outcome,
                })
                break

    return tests


def summarize(tests):
    counts = {outcome: 0 for outcome in STATUS_WORDS.values()}
    for test in tests:
        counts[test["outcome"]] += 1
    counts["total"] = len(tests)
    return counts


def run_pytest(tests_dir, timeout=600):
    """
    Run pytest on ``tests_dir`` with the project root on PYTHONPATH.

    Returns a dict with per-test outcomes, a summary and the tail of the output.
    """
    logger.info(f"[Evaluation] Running tests in {tests_dir}")
    cmd = [sys.executable, "-m", "pytest", str(tests_dir), "-v", "--tb=short"]

    env = os.environ.copy()
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(PROJECT_ROOT), env.get("PYTHONPATH")]))

    try:
        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            cwd=str(PROJECT_ROOT),
            env=env,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired:
        logger.error("[Evaluation] Test execution timed out")
        return {
            "success": False,
            "exit_code": -1,
            "tests": [],
            "summary": {"error": "Test execution timed out"},
            "stdout": "",
            "stderr": "",
        }

    tests = parse_pytest_verbose_output(result.stdout)
    summary = summarize(tests)
    logger.info(
        f"[Evaluation] {summary['passed']} passed, {summary['failed']} failed, "
        f"{summary['error']} errors, {summary['skipped']} skipped (total: {summary['total']})"
    )
    return {
        "success": result.returncode == 0,
        "exit_code": result.returncode,
        "tests": tests,
        "summary": summary,
        "stdout": result.stdout[-3000:],
        "stderr": result.stderr[-1000:],
    }


def generate_output_path(now=None):
    """Generate output path in format: evaluation/YYYY-MM-DD/HH-MM-SS/report.json"""
    now = now or datetime.now()
    output_dir = PROJECT_ROOT / "evaluation" / now.strftime("%Y-%m-%d") / now.strftime("%H-%M-%S")
    return output_dir / "report.json"


def build_report(results, started_at, finished_at):
    return {
        "run_id": generate_run_id(),
        "started_at": started_at.isoformat(),
        "finished_at": finished_at.isoformat(),
        "duration_seconds": round((finished_at - started_at).total_seconds(), 6),
        "success": results.get("success", False),
        "environment": get_environment_info(),
        "results": results,
    }


def main(argv=None):
    """Main entry point for evaluation."""
    import argparse

    parser = argparse.ArgumentParser(description="Run the Huffman test suite and write a JSON report")
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Output JSON file path (default: evaluation/YYYY-MM-DD/HH-MM-SS/report.json)"
    )
    parser.add_argument("--tests", type=str, default=str(PROJECT_ROOT / "tests"), help="Tests directory")
    args = parser.parse_args(argv)

    started_at = datetime.now()
    results = run_pytest(args.tests)
    report = build_report(results, started_at, datetime.now())

    output_path = Path(args.output) if args.output else generate_output_path(started_at)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w") as f:
        json.dump(report, f, indent=2)
    logger.info(f"[Evaluation] Report saved to {output_path}")

    return 0 if report["success"] else 1


if __name__ == "__main__":
    sys.exit(main())
