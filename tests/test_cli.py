import argparse
import json
import os
import shutil
import sys
import tempfile
import unittest
from io import StringIO
from pathlib import Path
from unittest.mock import MagicMock, patch

from rich.console import Console
from rich.table import Table

# Add project root to Python path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from required_env import cli
from required_env.exceptions import ConfigError


class TestCLI(unittest.TestCase):
    """Unit tests for CLI module"""

    def setUp(self):
        """Set up test fixtures before each test method"""
        self.temp_dir = tempfile.mkdtemp()
        self.original_cwd = os.getcwd()
        # Run from an empty directory so no stray .env file is picked up
        os.chdir(self.temp_dir)
        self.env = {
            "CLI_TEST_PORT": "8080",
            "CLI_TEST_HOSTS": "a|b",
            "CLI_TEST_TIMEOUT": "1m30s",
            "CLI_TEST_NAME": "billing",
        }
        self.console_mock = MagicMock(spec=Console)

    def tearDown(self):
        """Clean up after each test method"""
        os.chdir(self.original_cwd)
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def run_main(self, *args):
        with patch("sys.argv", ["required-env", *args]):
            with patch.dict(os.environ, self.env):
                with patch.object(cli, "console", self.console_mock):
                    with patch("sys.stdout", new_callable=StringIO) as mock_stdout:
                        cli.main()
                        return mock_stdout.getvalue()

    def test_main_function_exists(self):
        """Test that main function exists and is callable"""
        self.assertTrue(hasattr(cli, "main"))
        self.assertTrue(callable(cli.main))

    def test_all_keys_present_prints_table(self):
        """Test a successful check renders a rich table and does not exit"""
        self.run_main("CLI_TEST_PORT:int", "CLI_TEST_NAME", "CLI_TEST_TIMEOUT:duration")
        printed = [c.args[0] for c in self.console_mock.print.call_args_list]
        tables = [p for p in printed if isinstance(p, Table)]
        self.assertEqual(len(tables), 1)
        self.assertEqual(tables[0].row_count, 3)

    def test_json_output(self):
        """Test --json emits one object per spec with rendered values"""
        output = self.run_main(
            "--json", "--sep", "|", "CLI_TEST_PORT:int", "CLI_TEST_HOSTS:strings", "CLI_TEST_TIMEOUT:duration"
        )
        payload = json.loads(output)
        self.assertEqual(
            payload[0],
            {"key": "CLI_TEST_PORT", "kind": "int", "ok": True, "value": 8080, "error": None},
        )
        self.assertEqual(payload[1]["value"], ["a", "b"])
        self.assertEqual(payload[2]["value"], 90.0)

    def test_missing_key_exits_with_fatal_error(self):
        """Test a missing key ends in the fatal check naming the key"""
        with self.assertRaises(SystemExit) as ctx:
            self.run_main("CLI_TEST_PORT:int", "CLI_TEST_NOT_SET")
        self.assertIn("Fatal error", str(ctx.exception.code))
        self.assertIn("CLI_TEST_NOT_SET", str(ctx.exception.code))
        self.assertNotIn("CLI_TEST_PORT", str(ctx.exception.code))

    def test_unparsable_value_fails(self):
        """Test a value that does not parse as its kind is reported as failed"""
        with self.assertRaises(SystemExit) as ctx:
            self.run_main("CLI_TEST_NAME:int")
        self.assertIn("CLI_TEST_NAME", str(ctx.exception.code))

    def test_json_failure_still_reports_results(self):
        """Test JSON output is written before the fatal exit"""
        with patch("sys.argv", ["required-env", "--json", "CLI_TEST_NOT_SET:bool"]):
            with patch("sys.stdout", new_callable=StringIO) as mock_stdout:
                with self.assertRaises(SystemExit):
                    cli.main()
        payload = json.loads(mock_stdout.getvalue())
        self.assertFalse(payload[0]["ok"])
        self.assertIsNone(payload[0]["value"])
        self.assertEqual(payload[0]["error"], "CLI_TEST_NOT_SET is a required environment variable.")

    def test_env_file_is_loaded(self):
        """Test values from --env-file are visible to the lookups"""
        env_file = Path(self.temp_dir) / "custom.env"
        env_file.write_text("CLI_TEST_FROM_FILE=10.0.0.1\n")
        output = self.run_main("--json", "--env-file", str(env_file), "CLI_TEST_FROM_FILE:addr")
        self.assertEqual(json.loads(output)[0]["value"], "10.0.0.1")

    def test_env_file_does_not_override_process_environment(self):
        """Test existing variables win over the dotenv file"""
        env_file = Path(self.temp_dir) / ".env"
        env_file.write_text("CLI_TEST_PORT=9999\n")
        output = self.run_main("--json", "CLI_TEST_PORT:int")
        self.assertEqual(json.loads(output)[0]["value"], 8080)

    def test_json_non_finite_float_is_valid_json(self):
        """Test infinite and NaN floats are written as strings, keeping the output strict JSON"""
        self.env["CLI_TEST_RATIO"] = "-inf"
        self.env["CLI_TEST_SCALE"] = "NaN"
        output = self.run_main("--json", "CLI_TEST_RATIO:float", "CLI_TEST_SCALE:float")
        self.assertNotIn("Infinity", output)
        payload = json.loads(output, parse_constant=lambda c: self.fail(f"non-standard JSON constant {c}"))
        self.assertEqual(payload[0]["value"], "-inf")
        self.assertEqual(payload[1]["value"], "nan")

    def test_unknown_kind_is_usage_error(self):
        """Test an unknown kind is rejected by argument parsing"""
        with patch("sys.stderr", new_callable=StringIO) as mock_stderr:
            with self.assertRaises(SystemExit) as ctx:
                self.run_main("CLI_TEST_PORT:complex")
        self.assertEqual(ctx.exception.code, 2)
        self.assertIn("unknown kind", mock_stderr.getvalue())

    def test_main_with_help_argument(self):
        """Test main function with help argument"""
        with patch("sys.argv", ["required-env", "--help"]):
            with patch("sys.stdout", new_callable=StringIO) as mock_stdout:
                with self.assertRaises(SystemExit):
                    cli.main()
        self.assertIn("usage", mock_stdout.getvalue().lower())

    def test_main_with_version_argument(self):
        """Test main function with version argument"""
        with patch("sys.argv", ["required-env", "--version"]):
            with patch("sys.stdout", new_callable=StringIO) as mock_stdout:
                with self.assertRaises(SystemExit) as ctx:
                    cli.main()
        self.assertEqual(ctx.exception.code, 0)
        self.assertIn("required-env", mock_stdout.getvalue())


class TestCLIHelpers(unittest.TestCase):
    """Unit tests for CLI helper functions"""

    def test_parse_spec_defaults_to_string(self):
        self.assertEqual(cli.parse_spec("NAME"), ("NAME", "string"))

    def test_parse_spec_with_kind(self):
        self.assertEqual(cli.parse_spec("PORT:int"), ("PORT", "int"))

    def test_parse_spec_rejects_empty_key(self):
        with self.assertRaises(argparse.ArgumentTypeError):
            cli.parse_spec(":int")

    def test_format_value(self):
        from datetime import timedelta
        from ipaddress import ip_address
        from urllib.parse import urlsplit

        self.assertEqual(cli.format_value(b"abc"), "abc")
        self.assertEqual(cli.format_value(timedelta(milliseconds=1500)), 1.5)
        self.assertEqual(cli.format_value(urlsplit("https://x.example/a")), "https://x.example/a")
        self.assertEqual(cli.format_value(ip_address("::1")), "::1")
        self.assertEqual(cli.format_value(["a"]), ["a"])
        self.assertIsNone(cli.format_value(None))
        self.assertEqual(cli.format_value(float("inf")), "inf")
        self.assertEqual(cli.format_value(2.5), 2.5)

    def test_load_environment_missing_file_is_skipped(self):
        cli.load_environment(Path("/nonexistent/definitely/.env"))

    def test_load_environment_unreadable_file(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            env_file = Path(temp_dir) / ".env"
            env_file.write_text("A=1\n")
            with patch.object(cli, "load_dotenv", side_effect=PermissionError("denied")):
                with self.assertRaises(ConfigError):
                    cli.load_environment(env_file)

    def test_check_passes_separator_to_strings_only(self):
        reader = MagicMock()
        cli.check(reader, [("A", "strings"), ("B", "int")], sep=";")
        reader.lookup.assert_any_call("strings", "A", sep=";")
        reader.lookup.assert_any_call("int", "B")


if __name__ == "__main__":
    unittest.main()
