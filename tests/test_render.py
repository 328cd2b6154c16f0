import os

import pytest

pytestmark = pytest.mark.skipif(
    not os.environ.get("DISPLAY"), reason="arcade front-end needs a display"
)


@pytest.fixture
def keys():
    render = pytest.importorskip("game.apophis.render")
    import arcade
    return render.KeyboardInput(), arcade.key


def test_steering_keys_cancel(keys):
    kb, key = keys
    kb.press(key.LEFT)
    assert kb.poll().movement_axis == -1.0
    kb.press(key.D)
    assert kb.poll().movement_axis == 0.0
    kb.release(key.LEFT)
    assert kb.poll().movement_axis == 1.0


def test_weapon_and_restart_keys_are_edges(keys):
    kb, key = keys
    kb.press(key.E)
    kb.press(key.R)
    first = kb.poll()
    second = kb.poll()
    assert first.weapon_next and first.restart
    assert not second.weapon_next and not second.restart

    kb.release(key.E)
    kb.poll()
    kb.press(key.E)
    assert kb.poll().weapon_next


def test_held_actions_are_levels(keys):
    kb, key = keys
    kb.press(key.SPACE)
    kb.press(key.B)
    for _ in range(3):
        inp = kb.poll()
        assert inp.firing and inp.boomba_held
