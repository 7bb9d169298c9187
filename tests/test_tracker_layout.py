from __future__ import annotations

from flip7tracker.client.pygame_app.scenes.tracker import HAND_Y, MAX_HAND_SLOTS, hand_slot_rects


def test_hand_badges_stop_above_hand_buttons() -> None:
    rects = hand_slot_rects(40)
    assert len(rects) == MAX_HAND_SLOTS == 20
    assert all(r.bottom <= HAND_Y + 100 for r in rects)


def test_hand_badges_do_not_overlap() -> None:
    rects = hand_slot_rects(MAX_HAND_SLOTS)
    for i, a in enumerate(rects):
        assert a.collidelist(rects[i + 1 :]) == -1


def test_small_hand_gets_one_rect_per_card() -> None:
    assert hand_slot_rects(0) == []
    assert len(hand_slot_rects(3)) == 3
