import json
import unittest

from app import app as flask_app
import app as app_mod
from game import Board

BASE_BOARD_STR = '875qa4j7a6q3aq7620559k2042j3'
BASE_STACK_STR = '68j68kk80q342ja709943k95'


def _stub_load_board(cards_str, stack_str, clear_all=False):
    # Three-card pyramid that solves in two moves
    return Board.new([4, 5, 6], [7], clear_all=clear_all)


class TestFlaskAPI(unittest.TestCase):
    def setUp(self):
        self.client = flask_app.test_client()

    def _post(self, path, payload):
        return self.client.post(path, data=json.dumps(payload), content_type="application/json")

    def test_given_health_when_requested_then_ok(self):
        r = self.client.get("/api/health")
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.get_json(), {"ok": True})

    def test_given_board_strings_when_parsed_then_state_returned(self):
        r = self._post("/api/parse", {"board": BASE_BOARD_STR, "stack": BASE_STACK_STR})
        self.assertEqual(r.status_code, 200)
        data = r.get_json()
        self.assertTrue(data["ok"])
        state = data["state"]
        self.assertEqual(len(state["cards"]), 28)
        self.assertEqual(len(state["stack"]), 24)
        self.assertEqual(state["leaves"], [21, 22, 23, 24, 25, 26, 27])
        self.assertEqual(state["removed"], [])
        self.assertEqual(state["stackIdx"], 0)
        self.assertEqual(state["moves"], 0)
        self.assertFalse(state["clearAll"])
        self.assertFalse(state["completed"])

    def test_given_bad_input_when_parsed_then_400_with_message(self):
        r = self._post("/api/parse", {"board": "12x", "stack": BASE_STACK_STR})
        self.assertEqual(r.status_code, 400)
        data = r.get_json()
        self.assertFalse(data["ok"])
        self.assertIn("Unknown value (x)", data["error"])

        r = self._post("/api/parse", {"board": BASE_BOARD_STR})
        self.assertEqual(r.status_code, 400)
        self.assertIn("required", r.get_json()["error"])

        r = self.client.post("/api/parse", data="not json", content_type="application/json")
        self.assertEqual(r.status_code, 400)

    def test_given_seed_when_new_game_then_reproducible_deal(self):
        r1 = self._post("/api/new", {"seed": 123})
        r2 = self._post("/api/new", {"seed": 123, "clearAll": True})
        self.assertEqual(r1.status_code, 200)
        d1, d2 = r1.get_json(), r2.get_json()
        self.assertEqual(len(d1["board"]), 28)
        self.assertEqual(len(d1["stack"]), 24)
        self.assertEqual((d1["board"], d1["stack"]), (d2["board"], d2["stack"]))
        self.assertFalse(d1["state"]["clearAll"])
        self.assertTrue(d2["state"]["clearAll"])

    def test_given_non_integer_seed_when_new_game_then_400(self):
        for seed in ([1, 2], {"a": 1}, "abc"):
            r = self._post("/api/new", {"seed": seed})
            self.assertEqual(r.status_code, 400)
            self.assertIn("seed", r.get_json()["error"])

        r = self._post("/api/new", {"seed": "123"})
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.get_json()["board"], self._post("/api/new", {"seed": 123}).get_json()["board"])

    def test_given_fresh_board_when_listing_moves_then_forced_king(self):
        r = self._post("/api/moves", {"board": BASE_BOARD_STR, "stack": BASE_STACK_STR})
        self.assertEqual(r.status_code, 200)
        moves = r.get_json()["legalMoves"]
        self.assertEqual(len(moves), 1)
        self.assertEqual(moves[0]["index"], 1)
        self.assertEqual(moves[0]["type"], "BOARD")
        self.assertEqual(moves[0]["draws"], 0)
        self.assertEqual(moves[0]["text"], "Remove K on the board")

    def test_given_move_prefix_when_listing_moves_then_replayed_first(self):
        r = self._post("/api/moves", {"board": BASE_BOARD_STR, "stack": BASE_STACK_STR, "solution": [1]})
        self.assertEqual(r.status_code, 200)
        data = r.get_json()
        self.assertEqual(data["state"]["moves"], 1)
        self.assertEqual(data["state"]["removed"], [21])
        self.assertEqual(len(data["legalMoves"]), 20)
        self.assertEqual([m["index"] for m in data["legalMoves"]], list(range(1, 21)))

    def test_given_bad_prefix_when_listing_moves_then_400(self):
        r = self._post("/api/moves", {"board": BASE_BOARD_STR, "stack": BASE_STACK_STR, "solution": [5]})
        self.assertEqual(r.status_code, 400)
        self.assertIn("Move 5 not found", r.get_json()["error"])

        r = self._post("/api/moves", {"board": BASE_BOARD_STR, "stack": BASE_STACK_STR, "solution": "1"})
        self.assertEqual(r.status_code, 400)
        r = self._post("/api/moves", {"board": BASE_BOARD_STR, "stack": BASE_STACK_STR, "solution": ["x"]})
        self.assertEqual(r.status_code, 400)

    def test_given_depth_out_of_range_when_solving_then_400(self):
        for depth in (0, app_mod.MAX_DEPTH_LIMIT + 1, "deep"):
            r = self._post("/api/solve", {"board": BASE_BOARD_STR, "stack": BASE_STACK_STR, "maxDepth": depth})
            self.assertEqual(r.status_code, 400)
            self.assertIn("maxDepth", r.get_json()["error"])

    def test_given_short_horizon_when_solving_then_unsolved(self):
        r = self._post("/api/solve", {"board": BASE_BOARD_STR, "stack": BASE_STACK_STR, "maxDepth": 2})
        self.assertEqual(r.status_code, 200)
        data = r.get_json()
        self.assertTrue(data["ok"])
        self.assertFalse(data["solved"])
        self.assertEqual(data["solution"], [])
        self.assertEqual(data["steps"], [])
        self.assertIsNone(data["plies"])

    def test_given_solvable_board_when_solving_then_solution_with_steps(self):
        orig = app_mod.load_board
        app_mod.load_board = _stub_load_board
        try:
            r = self._post("/api/solve", {"board": "x", "stack": "y", "maxDepth": 10, "increasedOptions": True})
        finally:
            app_mod.load_board = orig
        self.assertEqual(r.status_code, 200)
        data = r.get_json()
        self.assertTrue(data["solved"])
        self.assertEqual(data["solution"], [1, 1])
        self.assertEqual(data["plies"], 2)
        self.assertGreater(data["statesSeen"], 0)
        self.assertEqual([s["text"] for s in data["steps"]], [
            "Match 7 on the board and 6 on the board",
            "Match 8 on the stack and 5 on the board",
        ])
        self.assertEqual(data["steps"][1]["type"], "BOARD_STACK")
        self.assertEqual(data["steps"][1]["cards"], [4, 7])


if __name__ == "__main__":
    unittest.main()
