"""Tests for engine.gate — pre-execution confirmation."""

import unittest

from makerust.engine.gate import ConfirmationGate, PROCEED_PROMPT
from makerust.engine.model import Decision
from tests.helpers import make_action, make_config, make_out, out_text, ScriptedInput, no_input


class TestConfirmationGate(unittest.TestCase):
    def setUp(self):
        self.out = make_out()
        self.action = make_action("Build Linux binary", "cargo", ("build", "--release"))

    def decide(self, *responses, **config):
        inp = ScriptedInput(*responses)
        gate = ConfirmationGate(self.out, input_fn=inp)
        return gate.decide(self.action, make_config(**config)), inp

    def test_force_proceeds_without_reading(self):
        gate = ConfirmationGate(self.out, input_fn=no_input)
        decision = gate.decide(self.action, make_config(force=True))
        self.assertEqual(decision, Decision.PROCEED)
        self.assertIn("executing without prompt: cargo build --release", out_text(self.out))

    def test_empty_response_proceeds(self):
        decision, inp = self.decide("")
        self.assertEqual(decision, Decision.PROCEED)
        self.assertEqual(inp.prompts, [PROCEED_PROMPT])

    def test_affirmative_responses_proceed(self):
        for response in ["y", "Y", "yes", " YES "]:
            decision, _ = self.decide(response)
            self.assertEqual(decision, Decision.PROCEED, msg=response)

    def test_abort_responses_abort(self):
        for response in ["a", "A", "abort"]:
            decision, _ = self.decide(response)
            self.assertEqual(decision, Decision.ABORT, msg=response)

    def test_other_responses_skip(self):
        for response in ["n", "no", "x", "maybe", "q"]:
            decision, _ = self.decide(response)
            self.assertEqual(decision, Decision.SKIP, msg=response)

    def test_reads_exactly_one_line(self):
        decision, inp = self.decide("x", "y")
        self.assertEqual(decision, Decision.SKIP)
        self.assertEqual(len(inp.prompts), 1)
        self.assertEqual(inp.responses, ["y"])

    def test_closed_input_aborts(self):
        decision, _ = self.decide()
        self.assertEqual(decision, Decision.ABORT)

    def test_prints_action_before_prompt(self):
        self.decide("")
        self.assertIn("About to execute: cargo build --release", out_text(self.out))


if __name__ == "__main__":
    unittest.main()
