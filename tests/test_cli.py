import io
import json
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from pathlib import Path
from unittest.mock import patch

from solana.rpc.core import UnconfirmedTxError
from solders.keypair import Keypair

from helloworld.accounts import derive_greeting_address
from helloworld.cli import main
from helloworld.errors import ProgramNotDeployedError
from helloworld.schema import COUNTER_LAYOUT, TEXT_LAYOUT
from rpc_fakes import FakeClient, account


class CliTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)
        self.payer = Keypair()
        self.program = Keypair()
        self.payer_path = self.tmp / "id.json"
        self.payer_path.write_text(json.dumps(list(bytes(self.payer))))
        self.program_path = self.tmp / "helloworld-keypair.json"
        self.program_path.write_text(json.dumps(list(bytes(self.program))))

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def _main(self, argv: list[str]) -> tuple[int, str]:
        with redirect_stdout(io.StringIO()) as out, redirect_stderr(io.StringIO()):
            rc = main(argv)
        return rc, out.getvalue()

    def test_address_from_keypairs(self) -> None:
        rc, out = self._main(
            [
                "address",
                "--payer",
                str(self.payer_path),
                "--program-keypair",
                str(self.program_path),
            ]
        )
        self.assertEqual(rc, 0)
        expected = derive_greeting_address(self.payer.pubkey(), self.program.pubkey())
        self.assertEqual(out.strip(), str(expected))

    def test_address_from_pubkeys_with_seed(self) -> None:
        rc, out = self._main(
            [
                "address",
                "--payer-pubkey",
                str(self.payer.pubkey()),
                "--program-id",
                str(self.program.pubkey()),
                "--seed",
                "other",
            ]
        )
        self.assertEqual(rc, 0)
        expected = derive_greeting_address(self.payer.pubkey(), self.program.pubkey(), "other")
        self.assertEqual(out.strip(), str(expected))

    def test_address_missing_program_keypair(self) -> None:
        rc, out = self._main(
            [
                "address",
                "--payer-pubkey",
                str(self.payer.pubkey()),
                "--program-keypair",
                str(self.tmp / "absent.json"),
            ]
        )
        self.assertEqual(rc, 1)
        self.assertIn("Failed to read program keypair", out)

    def test_size(self) -> None:
        rc, out = self._main(["size"])
        self.assertEqual(rc, 0)
        self.assertIn(f"Greeting account size: {TEXT_LAYOUT.size}", out)
        rc, out = self._main(["size", "--layout", "counter"])
        self.assertIn("Greeting account size: 4", out)

    def test_run_success(self) -> None:
        with patch("helloworld.cli.run", return_value="Hello1234567") as mock_run:
            rc, out = self._main(["run", "--rpc-url", "http://127.0.0.1:8899", "--payer", str(self.payer_path)])
        self.assertEqual(rc, 0)
        options = mock_run.call_args.args[0]
        self.assertEqual(options.rpc_url, "http://127.0.0.1:8899")
        self.assertEqual(options.payer, str(self.payer_path))
        self.assertEqual(options.message, "Hello1234567")
        self.assertIs(options.layout, TEXT_LAYOUT)
        self.assertTrue(out.startswith("Let's say hello to a Solana account..."))
        self.assertIn("Success", out)

    def test_run_failure_exit_code(self) -> None:
        with patch("helloworld.cli.run", side_effect=ProgramNotDeployedError("Program needs to be built and deployed")):
            rc, out = self._main(["run"])
        self.assertEqual(rc, 1)
        self.assertIn("Program needs to be built and deployed", out)
        self.assertNotIn("Success", out)

    def test_run_rpc_timeout_exit_code(self) -> None:
        with patch("helloworld.cli.run", side_effect=UnconfirmedTxError("not confirmed")):
            rc, out = self._main(["run"])
        self.assertEqual(rc, 1)
        self.assertIn("RPC error", out)

    def test_run_rejects_message_with_counter_layout(self) -> None:
        with patch("helloworld.cli.run") as mock_run:
            rc, out = self._main(["run", "--layout", "counter", "--message", "Hello1234567"])
        self.assertEqual(rc, 1)
        self.assertIn("--message is not used with --layout counter", out)
        mock_run.assert_not_called()

    def test_run_counter_layout_without_message(self) -> None:
        with patch("helloworld.cli.run", return_value=1) as mock_run:
            rc, _ = self._main(["run", "--layout", "counter"])
        self.assertEqual(rc, 0)
        self.assertIs(mock_run.call_args.args[0].layout, COUNTER_LAYOUT)


class ReportCommandTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)
        self.payer = Keypair()
        self.program = Keypair()
        self.payer_path = self.tmp / "id.json"
        self.payer_path.write_text(json.dumps(list(bytes(self.payer))))
        self.program_path = self.tmp / "helloworld-keypair.json"
        self.program_path.write_text(json.dumps(list(bytes(self.program))))
        self.client = FakeClient()
        self.client.balances[self.payer.pubkey()] = 10**9
        self.client.accounts[self.program.pubkey()] = account(executable=True)
        patcher = patch("helloworld.workflow.establish_connection", return_value=self.client)
        patcher.start()
        self.addCleanup(patcher.stop)
        self.greeted = derive_greeting_address(self.payer.pubkey(), self.program.pubkey())

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def _report(self) -> tuple[int, str]:
        argv = [
            "report",
            "--config",
            str(self.tmp / "config.yml"),
            "--payer",
            str(self.payer_path),
            "--program-keypair",
            str(self.program_path),
            "--program-so",
            str(self.tmp / "helloworld.so"),
        ]
        with redirect_stdout(io.StringIO()) as out, redirect_stderr(io.StringIO()):
            rc = main(argv)
        return rc, out.getvalue()

    def test_missing_account_sends_nothing(self) -> None:
        rc, out = self._report()
        self.assertEqual(rc, 1)
        self.assertEqual(self.client.sent, [])
        self.assertEqual(self.client.airdrops, [])
        self.assertNotIn(self.greeted, self.client.accounts)
        self.assertIn(f"Cannot find the greeted account {self.greeted}", out)
        self.assertIn("helloworld run", out)

    def test_existing_account_is_decoded(self) -> None:
        self.client.accounts[self.greeted] = account(TEXT_LAYOUT.encode("Hello1234567"))
        rc, out = self._report()
        self.assertEqual(rc, 0)
        self.assertEqual(self.client.sent, [])
        self.assertIn("has been sent message: Hello1234567", out)


if __name__ == "__main__":
    unittest.main()
