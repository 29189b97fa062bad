from lichsurvivor.config import InputState


def test_default_input_has_nothing_pressed():
    state = InputState()
    assert state.any_pressed() is False


def test_single_direction_counts_as_pressed():
    for field in ("left", "right", "up", "down"):
        state = InputState()
        setattr(state, field, True)
        assert state.any_pressed() is True


def test_clear_releases_all_directions():
    state = InputState(left=True, right=True, up=True, down=True)
    state.clear()
    assert state == InputState()
    assert state.any_pressed() is False