# -*- coding: utf-8 -*-
"""
tests/modules/entitlement/test_preview_gate.py

Máquina de estados de la compuerta de preview (sin reloj: tick() manual).
"""

import pytest

from app.modules.entitlement.enums import GateState
from app.modules.entitlement.services import DEFAULT_PREVIEW_SECONDS, PreviewGate


class Recorder:
    def __init__(self, gate: PreviewGate) -> None:
        self.changes = []
        self.payments = []
        self.unlocks = []
        gate.on_change(self.changes.append)
        gate.on_payment_required(self.payments.append)
        gate.on_unlock(self.unlocks.append)


@pytest.fixture
def gate():
    return PreviewGate("taj-mahal-360")


def _tick(gate, n):
    for _ in range(n):
        gate.tick()


def test_initial_state(gate):
    snap = gate.snapshot()
    assert snap.state == GateState.LOCKED_COUNTING
    assert snap.preview_seconds_remaining == DEFAULT_PREVIEW_SECONDS == 60
    assert not snap.is_playing
    assert snap.to_dict()["state"] == "locked_counting"


def test_counts_down_only_while_playing(gate):
    assert not gate.tick()
    gate.play()
    _tick(gate, 10)
    assert gate.remaining == 50

    gate.pause()
    assert gate.state == GateState.LOCKED_PAUSED
    _tick(gate, 5)
    assert gate.remaining == 50

    gate.play()
    gate.tick()
    assert gate.remaining == 49
    assert gate.state == GateState.LOCKED_COUNTING


def test_expires_after_sixty_playing_seconds(gate):
    events = Recorder(gate)
    gate.play()
    _tick(gate, 59)
    assert not gate.has_expired
    assert events.payments == []

    gate.tick()
    snap = gate.snapshot()
    assert snap.state == GateState.LOCKED_EXPIRED
    assert snap.preview_seconds_remaining == 0
    assert not snap.is_playing
    assert len(events.payments) == 1

    # Sin más conteo ni pausas tras expirar
    assert not gate.tick()
    gate.pause()
    assert gate.state == GateState.LOCKED_EXPIRED


def test_play_after_expiry_only_requests_payment(gate):
    gate.play()
    _tick(gate, 60)
    events = Recorder(gate)

    gate.play()
    assert not gate.is_playing
    assert len(events.payments) == 1
    assert events.changes == []


def test_stop_keeps_remaining(gate):
    gate.play()
    _tick(gate, 3)
    gate.stop()
    assert gate.remaining == 57
    assert not gate.is_playing and not gate.is_paused
    assert not gate.tick()


@pytest.mark.parametrize("setup", ["counting", "paused", "expired"])
def test_unlock_from_any_locked_state(gate, setup):
    gate.play()
    if setup == "paused":
        gate.pause()
    elif setup == "expired":
        _tick(gate, 60)
    events = Recorder(gate)

    gate.unlock()

    assert gate.state == GateState.UNLOCKED
    assert len(events.unlocks) == 1
    assert not gate.tick()
    gate.unlock()
    assert len(events.unlocks) == 1


def test_apply_access_never_relocks(gate):
    gate.apply_access(True)
    gate.apply_access(False)
    assert gate.state == GateState.UNLOCKED


def test_unlocked_gate_never_counts():
    gate = PreviewGate("kerala", has_access=True)
    gate.play()
    _tick(gate, 100)
    assert gate.remaining == 60
    assert gate.state == GateState.UNLOCKED


def test_switch_content_resets_even_after_expiry(gate):
    gate.play()
    _tick(gate, 60)

    gate.switch_content("kerala")
    snap = gate.snapshot()
    assert snap.content_id == "kerala"
    assert snap.state == GateState.LOCKED_COUNTING
    assert snap.preview_seconds_remaining == 60
    assert not snap.is_playing


def test_switch_content_uses_access_of_new_content():
    gate = PreviewGate("owned", has_access=True)
    gate.switch_content("not-owned", has_access=False)
    assert gate.state == GateState.LOCKED_COUNTING
    gate.switch_content("owned-again")
    assert gate.state == GateState.LOCKED_COUNTING


def test_closed_gate_ignores_everything(gate):
    events = Recorder(gate)
    gate.close()

    gate.play()
    gate.tick()
    gate.unlock()
    gate.switch_content("other")

    assert gate.closed
    assert gate.content_id == "taj-mahal-360"
    assert gate.remaining == 60
    assert events.changes == events.unlocks == events.payments == []


def test_listener_errors_do_not_break_gate(gate):
    def boom(_snapshot):
        raise RuntimeError("listener failed")

    gate.on_change(boom)
    seen = []
    gate.on_change(seen.append)

    gate.play()
    assert gate.is_playing
    assert len(seen) == 1


def test_unsubscribe(gate):
    seen = []
    remove = gate.on_change(seen.append)
    remove()
    gate.play()
    assert seen == []


@pytest.mark.parametrize("seconds", [0, -1])
def test_rejects_non_positive_preview(seconds):
    with pytest.raises(ValueError):
        PreviewGate("x", preview_seconds=seconds)
