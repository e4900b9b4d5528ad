from __future__ import annotations

import contextlib
import importlib.util
import io
import unittest
from pathlib import Path

from app.services.notification_tracker import POLICIES

SCRIPT = Path(__file__).resolve().parent.parent / "scripts" / "watch_notifications.py"


def _load_script():
    module_spec = importlib.util.spec_from_file_location("watch_notifications", SCRIPT)
    module = importlib.util.module_from_spec(module_spec)
    module_spec.loader.exec_module(module)
    return module


class WatchScriptArgumentTests(unittest.TestCase):
    def test_policy_choices_follow_tracker_policies(self):
        parser = _load_script().build_parser()
        for policy in POLICIES:
            args = parser.parse_args(["--username", "reader1", "--password", "pw", "--policy", policy])
            self.assertEqual(args.policy, policy)
        with contextlib.redirect_stderr(io.StringIO()), self.assertRaises(SystemExit):
            parser.parse_args(["--username", "reader1", "--password", "pw", "--policy", "count"])


if __name__ == "__main__":
    unittest.main()
