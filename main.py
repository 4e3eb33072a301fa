#!/usr/bin/env python3
# ABOUTME: Main entry point for the sandbox end-to-end runner
# ABOUTME: Runs the discovered browser specs, forwarding extra arguments to pytest

import logging
import sys

from qa_sandbox.runner import run


def main():
    """Main entry point."""
    logging.basicConfig(
        level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )
    print("🌐 QA Sandbox E2E Runner")

    try:
        exit_code = run(extra_args=sys.argv[1:])
    except KeyboardInterrupt:
        print("\n👋 Interrupted")
        exit_code = 2

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
