"""Context truncation policy tests."""

from __future__ import annotations

import unittest

from contextpin.chain import ContextEntry, TruncationPolicy, chain_texts, outline_style, truncate_chain


def _chain(count: int) -> list[ContextEntry]:
    return [ContextEntry(text=f"{'  ' * idx}level {idx}\n", line=idx, depth=idx * 2) for idx in range(count)]


def _is_subsequence(candidate: list[ContextEntry], source: list[ContextEntry]) -> bool:
    remaining = iter(source)
    return all(any(item == other for other in remaining) for item in candidate)


class TruncationTests(unittest.TestCase):
    def test_keeps_first_entry_and_last_two(self) -> None:
        chain = _chain(5)
        result = truncate_chain(chain, TruncationPolicy(keep_from_top=1, keep_from_bottom=2))
        self.assertEqual(result, [chain[0], chain[3], chain[4]])

    def test_zero_policy_returns_chain_unchanged(self) -> None:
        chain = _chain(4)
        self.assertEqual(truncate_chain(chain, TruncationPolicy()), chain)

    def test_zero_bottom_keeps_only_top_slice(self) -> None:
        chain = _chain(4)
        self.assertEqual(truncate_chain(chain, TruncationPolicy(2, 0)), chain[:2])

    def test_zero_top_keeps_only_bottom_slice(self) -> None:
        chain = _chain(4)
        self.assertEqual(truncate_chain(chain, TruncationPolicy(0, 1)), chain[-1:])

    def test_short_chain_within_budget_is_kept_whole(self) -> None:
        chain = _chain(2)
        self.assertEqual(truncate_chain(chain, TruncationPolicy(3, 3)), chain)

    def test_empty_chain_stays_empty(self) -> None:
        self.assertEqual(truncate_chain([], TruncationPolicy(1, 1)), [])

    def test_truncation_is_idempotent_order_preserving_and_bounded(self) -> None:
        policies = [TruncationPolicy(top, bottom) for top in range(4) for bottom in range(4)]
        for length in (0, 1, 3, 7):
            chain = _chain(length)
            for policy in policies:
                with self.subTest(length=length, policy=policy):
                    once = truncate_chain(chain, policy)
                    self.assertEqual(truncate_chain(once, policy), once)
                    self.assertTrue(_is_subsequence(once, chain))
                    if not policy.disabled:
                        self.assertLessEqual(len(once), policy.keep_from_top + policy.keep_from_bottom)

    def test_negative_counts_are_rejected(self) -> None:
        with self.assertRaises(ValueError):
            TruncationPolicy(-1, 0)

    def test_chain_texts_and_outline_styles(self) -> None:
        self.assertEqual(chain_texts(_chain(2)), ["level 0\n", "  level 1\n"])
        self.assertEqual(outline_style(1), "outline-1")
        self.assertEqual(outline_style(9), "outline-1")
        self.assertEqual(outline_style(0), "outline-1")


if __name__ == "__main__":
    unittest.main()
