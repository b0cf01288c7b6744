import unittest

from game import (
    EngineNotInitializedError,
    LevelCompleteData,
    PuzzleEngine,
    get_level,
    get_total_levels,
    legal_moves,
)
from gridlock_core.cli import autoplay, render

R = 'red'
B = 'blue'


class TestPuzzleEngine(unittest.TestCase):
    def setUp(self):
        self.engine = PuzzleEngine()
        self.snapshots = []
        self.completions = []
        self.engine.on_state_change(self.snapshots.append)
        self.engine.on_level_complete(self.completions.append)

    def test_given_fresh_engine_when_reading_state_then_raises(self):
        with self.assertRaises(EngineNotInitializedError):
            self.engine.get_state()
        self.assertIsInstance(EngineNotInitializedError(), RuntimeError)
        self.assertIsNone(self.engine.find_best_hint_move(2))
        self.assertFalse(self.engine.move(0, 1))
        self.assertFalse(self.engine.undo())

    def test_given_unknown_level_when_loading_then_false_and_state_unchanged(self):
        self.assertFalse(self.engine.load_level(999))
        with self.assertRaises(EngineNotInitializedError):
            self.engine.get_state()
        self.engine.init(2)
        self.engine.move(0, 2)
        self.assertFalse(self.engine.load_level(0))
        state = self.engine.get_state()
        self.assertEqual(state.level_id, 2)
        self.assertEqual(state.moves, 1)

    def test_given_already_solved_level_when_loaded_then_completion_fires(self):
        self.assertTrue(self.engine.init())
        self.assertEqual(self.completions, [LevelCompleteData(level_id=1, moves=0, is_last_level=False)])
        self.assertEqual(len(self.snapshots), 1)
        self.assertTrue(self.snapshots[0].is_complete)

    def test_given_level_two_when_solving_then_snapshots_progress_and_completion(self):
        self.engine.init(2)
        self.assertEqual(self.completions, [])
        self.assertTrue(self.engine.move(0, 2))
        state = self.engine.get_state()
        self.assertEqual(state.conduits, [[R], [B, R], [B], []])
        self.assertEqual(state.moves, 1)
        self.assertTrue(state.can_undo)
        self.assertEqual(state.progress, 0.0)

        self.assertFalse(self.engine.move(1, 2))
        self.assertEqual(len(self.snapshots), 2)  # rejected move does not notify

        self.assertTrue(self.engine.move(1, 0))
        state = self.engine.get_state()
        self.assertEqual(state.conduits, [[R, R], [B], [B], []])
        self.assertTrue(state.is_complete)
        self.assertAlmostEqual(state.progress, 1 / 3)
        self.assertEqual(state.powered_conduits, [True, False, False, False])
        self.assertEqual(self.completions[-1], LevelCompleteData(level_id=2, moves=2, is_last_level=False))

        self.assertTrue(self.engine.move(2, 1))
        state = self.engine.get_state()
        self.assertEqual(state.conduits, [[R, R], [B, B], [], []])
        self.assertEqual(state.progress, 1.0)
        self.assertEqual(state.powered_conduits, [True, True, False, False])

    def test_given_callbacks_when_reregistered_then_replaced(self):
        second = []
        self.engine.on_state_change(second.append)
        self.engine.init(2)
        self.assertEqual(self.snapshots, [])
        self.assertEqual(len(second), 1)
        self.engine.on_state_change(None)
        self.engine.move(0, 2)
        self.assertEqual(len(second), 1)

    def test_given_snapshot_when_mutated_then_engine_unaffected(self):
        self.engine.init(3)
        state = self.engine.get_state()
        state.conduits[0].clear()
        state.conduits.append([R])
        self.assertEqual(self.engine.get_state().conduits, [list(c) for c in get_level(3).conduits])

    def test_given_moves_when_undo_and_restart_then_initial_state(self):
        self.engine.init(5)
        initial = self.engine.get_state().conduits
        self.assertFalse(self.engine.undo())
        count = len(self.snapshots)
        self.assertEqual(count, 1)
        for move in legal_moves(initial, 4):
            self.assertTrue(self.engine.move(move.source, move.target))
            self.assertTrue(self.engine.undo())
            self.assertEqual(self.engine.get_state().conduits, initial)
            self.assertEqual(self.engine.get_state().moves, 0)
        self.engine.move(0, 4)
        self.engine.move(2, 5)
        self.engine.restart()
        state = self.engine.get_state()
        self.assertEqual(state.conduits, initial)
        self.assertEqual(state.moves, 0)
        self.assertFalse(state.can_undo)

    def test_given_levels_when_advancing_then_next_until_last(self):
        self.engine.init(1)
        self.assertTrue(self.engine.next_level())
        self.assertEqual(self.engine.get_state().level_id, 2)
        self.assertTrue(self.engine.load_level(get_total_levels()))
        self.assertTrue(self.engine.is_last_level())
        self.assertFalse(self.engine.next_level())
        self.assertEqual(self.engine.get_state().level_id, get_total_levels())

    def test_given_level_when_peeking_and_validating_then_matches_rules(self):
        self.engine.init(2)
        self.assertEqual(self.engine.peek_top_core(0), B)
        self.assertEqual(self.engine.peek_top_core(1), R)
        self.assertIsNone(self.engine.peek_top_core(3))
        self.assertIsNone(self.engine.peek_top_core(42))
        self.assertTrue(self.engine.is_valid_move(0, 2))
        self.assertFalse(self.engine.is_valid_move(0, 1))
        self.assertFalse(self.engine.is_valid_move(2, 3))

    def test_given_hint_search_when_run_then_engine_state_untouched(self):
        self.engine.init(7)
        before = self.engine.get_state()
        count = len(self.snapshots)
        hint = self.engine.find_best_hint_move(2)
        self.assertIsNotNone(hint)
        self.assertTrue(self.engine.is_valid_move(hint.source, hint.target))
        self.assertEqual(self.engine.get_state(), before)
        self.assertEqual(len(self.snapshots), count)

    def test_given_hints_when_autoplaying_then_level_two_solved(self):
        self.engine.init(2)
        self.assertTrue(autoplay(self.engine, depth=2, max_moves=10))
        self.assertLessEqual(self.engine.get_state().moves, 10)
        self.assertEqual(self.completions[-1].level_id, 2)
        self.assertIn('Color Separation', render(self.engine.get_state()))

    def test_given_solved_level_when_autoplaying_then_no_moves(self):
        self.engine.init(1)
        self.assertTrue(autoplay(self.engine, depth=2, max_moves=10))
        self.assertEqual(self.engine.get_state().moves, 0)


if __name__ == '__main__':
    unittest.main(verbosity=2)
