"""Helpers for verifying messages reported through a mocked linter."""

import unittest.mock


class CheckerTestCase:
    """Mixin for Checker tests. The checker's linter must be a MagicMock."""

    def reported_codes(self, checker) -> list[str]:
        """Message ids passed to linter.add_message, in report order."""
        return [call[0][0] for call in checker.linter.add_message.call_args_list]

    def assertAddsMessage(self, checker, msg_id, node=None, args=None):
        """Verify that checker.add_message was called."""
        # BaseChecker.add_message forwards (msgid, line, node, args, ...) positionally
        calls = checker.linter.add_message.call_args_list
        for call in calls:
            c_args, c_kwargs = call
            if not (len(c_args) > 0 and c_args[0] == msg_id):
                continue
            actual_node = c_args[2] if len(c_args) > 2 else c_kwargs.get("node")
            if node is not None and actual_node is not node:
                continue
            actual_args = c_args[3] if len(c_args) > 3 else c_kwargs.get("args")
            if args is not None and args != unittest.mock.ANY and actual_args != args:
                continue
            return
        raise AssertionError(f"Message {msg_id} not found in calls: {calls}")

    def assertNoMessages(self, checker):
        calls = checker.linter.add_message.call_args_list
        if calls:
            raise AssertionError(f"Expected no messages, but found: {calls}")
