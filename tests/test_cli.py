"""
Tests for the crrl command line, run through Typer's CliRunner.

Network calls are replaced on RulesAPIClient; everything else runs as in
production, including the file write into a temporary directory.
"""

import os
import shutil
import signal
import subprocess
import sys
import tempfile
import threading
import time
import unittest
from pathlib import Path
from unittest.mock import AsyncMock, patch

from typer.testing import CliRunner

from crrl import __version__
from crrl.api.client import RulesAPIClient
from crrl.cli.app import app
from crrl.exceptions import ApiConnectionError, RateLimitError

runner = CliRunner()

REPO_ROOT = Path(__file__).resolve().parent.parent

# Runs the real entry point with only the directory listing replaced.
PROMPT_SCRIPT = """
import sys
from unittest.mock import AsyncMock, patch

from crrl.__main__ import main
from crrl.api.client import RulesAPIClient

sys.argv = ["crrl", "--dir", sys.argv[1]]
with patch.object(
    RulesAPIClient, "fetch_directory_list", new_callable=AsyncMock,
    return_value=["python", "rust"],
):
    main()
"""


class TestCli(unittest.TestCase):
    def setUp(self):
        self.tmp = Path(tempfile.mkdtemp())

    def tearDown(self):
        shutil.rmtree(self.tmp, ignore_errors=True)

    @property
    def written(self) -> Path:
        return self.tmp / ".cursorrules"

    def invoke(self, *args: str):
        return runner.invoke(app, [*args, "--dir", str(self.tmp)])

    def test_version(self):
        result = runner.invoke(app, ["--version"])
        self.assertEqual(result.exit_code, 0)
        self.assertIn(__version__, result.output)

    def test_explicit_url_writes_file(self):
        with patch.object(
            RulesAPIClient, "fetch_remote_file", new_callable=AsyncMock
        ) as fetch:
            fetch.return_value = "rule: foo"
            result = self.invoke("--url", "https://example.com/.cursorrules")

        self.assertEqual(result.exit_code, 0, result.output)
        fetch.assert_awaited_once_with("https://example.com/.cursorrules")
        self.assertEqual(self.written.read_text(encoding="utf-8"), "rule: foo")
        self.assertIn("Successfully created .cursorrules file", result.output)

    def test_invalid_url_exits_without_network(self):
        with patch.object(
            RulesAPIClient, "fetch_remote_file", new_callable=AsyncMock
        ) as fetch:
            result = self.invoke("--url", "ftp://bad")

        self.assertEqual(result.exit_code, 1)
        fetch.assert_not_awaited()
        self.assertIn("Invalid URL format", result.output)
        self.assertFalse(self.written.exists())

    def test_missing_directory_exits_with_error(self):
        missing = self.tmp / "nope"
        with patch.object(
            RulesAPIClient, "fetch_remote_file", new_callable=AsyncMock
        ) as fetch:
            fetch.return_value = "rule: foo"
            result = runner.invoke(
                app, ["--url", "https://example.com/r", "--dir", str(missing)]
            )

        self.assertEqual(result.exit_code, 1)
        self.assertIn("Directory does not exist", result.output)

    def test_directory_flow_with_selection(self):
        with patch.object(
            RulesAPIClient, "fetch_directory_list", new_callable=AsyncMock
        ) as listing, patch.object(
            RulesAPIClient, "fetch_cursorrules_file", new_callable=AsyncMock
        ) as fetch, patch("crrl.cli.app.prompt_for_directory", return_value="rust") as prompt:
            listing.return_value = ["python", "rust"]
            fetch.return_value = "rule: rust"
            result = self.invoke()

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(prompt.call_args.args[0], ["python", "rust"])
        fetch.assert_awaited_once_with("rust")
        self.assertEqual(self.written.read_text(encoding="utf-8"), "rule: rust")

    def test_cancelled_prompt_exits_cleanly(self):
        with patch.object(
            RulesAPIClient, "fetch_directory_list", new_callable=AsyncMock
        ) as listing, patch.object(
            RulesAPIClient, "fetch_cursorrules_file", new_callable=AsyncMock
        ) as fetch, patch("crrl.cli.app.prompt_for_directory", return_value=None):
            listing.return_value = ["python"]
            result = self.invoke()

        self.assertEqual(result.exit_code, 0, result.output)
        fetch.assert_not_awaited()
        self.assertFalse(self.written.exists())
        self.assertIn("Operation cancelled by user.", result.output)

    def test_interrupt_while_installing_exits_cleanly(self):
        with patch.object(
            RulesAPIClient, "fetch_directory_list", new_callable=AsyncMock
        ) as listing, patch(
            "crrl.cli.app.prompt_for_directory", side_effect=KeyboardInterrupt
        ):
            listing.return_value = ["python"]
            result = self.invoke()

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("Operation cancelled by user.", result.output)
        self.assertFalse(self.written.exists())

    def test_empty_listing_exits_with_error(self):
        with patch.object(
            RulesAPIClient, "fetch_directory_list", new_callable=AsyncMock
        ) as listing:
            listing.return_value = []
            result = self.invoke()

        self.assertEqual(result.exit_code, 1)
        self.assertIn("No directories found", result.output)

    def test_whitespace_content_exits_with_error(self):
        with patch.object(
            RulesAPIClient, "fetch_remote_file", new_callable=AsyncMock
        ) as fetch:
            fetch.return_value = "   \n"
            result = self.invoke("--url", "https://example.com/.cursorrules")

        self.assertEqual(result.exit_code, 1)
        self.assertIn("file is empty", result.output)
        self.assertFalse(self.written.exists())

    def test_rate_limit_gets_its_own_hint(self):
        error = ApiConnectionError("There was a problem connecting to the GitHub API.")
        error.__cause__ = RateLimitError("GitHub API rate limit exceeded.")
        with patch.object(
            RulesAPIClient, "fetch_directory_list", new_callable=AsyncMock
        ) as listing:
            listing.side_effect = error
            result = self.invoke()

        self.assertEqual(result.exit_code, 1)
        self.assertIn("rate limit", result.output)


@unittest.skipUnless(os.name == "posix", "sends SIGINT to a child process")
class TestInterruptAtPrompt(unittest.TestCase):
    """Ctrl-C at the real directory prompt, in a separate process."""

    def setUp(self):
        self.tmp = Path(tempfile.mkdtemp())
        env = dict(os.environ, PYTHONPATH=str(REPO_ROOT), PYTHONUNBUFFERED="1")
        self.proc = subprocess.Popen(
            [sys.executable, "-c", PROMPT_SCRIPT, str(self.tmp)],
            cwd=REPO_ROOT,
            env=env,
            stdin=subprocess.PIPE,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
        )
        self.output = b""
        self.reader = threading.Thread(target=self._read, daemon=True)
        self.reader.start()

    def tearDown(self):
        if self.proc.poll() is None:
            self.proc.kill()
        self.proc.wait()
        self.proc.stdin.close()
        self.proc.stdout.close()
        shutil.rmtree(self.tmp, ignore_errors=True)

    def _read(self):
        while True:
            chunk = os.read(self.proc.stdout.fileno(), 4096)
            if not chunk:
                return
            self.output += chunk

    def _wait_for(self, text: bytes, timeout: float = 30.0) -> None:
        deadline = time.monotonic() + timeout
        while text not in self.output:
            if time.monotonic() > deadline or self.proc.poll() is not None:
                self.fail(f"never saw {text!r}; output was:\n{self.output.decode()}")
            time.sleep(0.05)

    def test_sigint_at_prompt_exits_zero(self):
        self._wait_for(b"Choose a directory")

        self.proc.send_signal(signal.SIGINT)
        try:
            returncode = self.proc.wait(timeout=3)
        except subprocess.TimeoutExpired:
            # asyncio.run swallows the first Ctrl-C to cancel its task; a
            # second one interrupts the blocking read.
            self.proc.send_signal(signal.SIGINT)
            returncode = self.proc.wait(timeout=30)
        self.reader.join(timeout=5)

        output = self.output.decode()
        self.assertEqual(returncode, 0, output)
        self.assertIn("Operation cancelled by user.", output)
        self.assertFalse((self.tmp / ".cursorrules").exists())


if __name__ == "__main__":
    unittest.main()
