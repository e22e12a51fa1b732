import pytest

from keyrooms.layout import (
    FinalizeError,
    GeneratorConfig,
    InsufficientKeyHolders,
    LayerGenerator,
    NoAvailableSpace,
    Position,
    RetriesExhausted,
    generate,
    validate_map,
)


def test_grid_too_small_exhausts_retries():
    with pytest.raises(RetriesExhausted) as exc:
        generate(1, 1, 3, seed=1)
    assert str(exc.value) == "Failed to generate after 10 retries"
    assert exc.value.retries == 10
    assert exc.value.code == "retries_exhausted"


def test_retry_budget_counts_every_failed_advance():
    gen = LayerGenerator(GeneratorConfig(width=1, height=1, layers=3, retries=4, seed=2))
    with pytest.raises(RetriesExhausted):
        gen.run()
    # a budget of N tolerates N failures and gives up on the next one
    assert gen.metrics["failed_advances"] == 5
    assert gen.metrics["no_space_failures"] == 5
    assert gen.metrics["backtracks"] == 0


def test_second_layer_that_cannot_fit_backs_up_and_gives_up():
    # 2x3 grid: layer 1 may fit, layer 2 never can
    gen = LayerGenerator(GeneratorConfig(width=3, height=2, layers=2, seed=11))
    with pytest.raises(RetriesExhausted):
        gen.run()
    assert gen.metrics["failed_advances"] == 11
    assert gen.metrics["attempts"] >= 11


def test_failed_advance_leaves_parent_untouched():
    gen = LayerGenerator(GeneratorConfig(width=2, height=2, layers=1, seed=3))
    root = gen.initial_state()
    before = root.room_map.to_dict()
    # three free cells, at least four rooms wanted
    with pytest.raises(NoAvailableSpace):
        gen.next_state(root)
    assert root.room_map.to_dict() == before
    assert len(root.positions) == 1
    assert root.layer == 0


def test_successful_advance_leaves_parent_untouched():
    gen = LayerGenerator(GeneratorConfig(width=6, height=6, layers=2, seed=4))
    root = gen.initial_state()
    child = gen.next_state(root)
    assert child.parent is root
    assert child.layer == 1
    assert len(child.positions) == 1 + child.amount
    assert len(root.positions) == 1
    assert sum(1 for _ in root.room_map.rooms()) == 1
    assert root.room_map.connections == ()


def test_insufficient_key_holders_raises():
    gen = LayerGenerator(GeneratorConfig(width=6, height=6, seed=8))
    root = gen.initial_state()
    child = gen.next_state(root)
    grandchild = child.derive()
    grandchild.layer += 1
    with pytest.raises(InsufficientKeyHolders) as exc:
        gen._distribute_keys(grandchild, child, child.amount + 1)
    assert exc.value.required == child.amount + 1
    assert exc.value.available == child.amount
    assert exc.value.code == "key_holders"


def test_key_holder_shortage_is_retried():
    gen = LayerGenerator(GeneratorConfig(width=10, height=10, layers=3, retries=200, seed=21))
    real = gen._distribute_keys
    calls = {"n": 0}

    def flaky(state, parent, amount):
        calls["n"] += 1
        if calls["n"] == 1:
            raise InsufficientKeyHolders(state.layer, amount, 0)
        return real(state, parent, amount)

    gen._distribute_keys = flaky
    m = gen.run()
    assert gen.metrics["key_holder_failures"] >= 1
    assert gen.metrics["backtracks"] >= 1
    issues = validate_map(m)
    assert all(not v for v in issues.values()), issues


def test_finalize_without_space_is_reported():
    with pytest.raises(FinalizeError):
        LayerGenerator(GeneratorConfig(width=1, height=1, layers=0, seed=1)).run()


def test_available_spaces_are_free_in_bounds_and_unique():
    gen = LayerGenerator(GeneratorConfig(width=4, height=4, seed=6))
    state = gen.next_state(gen.initial_state())
    spaces = gen.available_spaces(state, skip=0)
    assert len(spaces) == len(set(spaces))
    occupied = set(state.positions)
    for pos in spaces:
        assert pos not in occupied
        assert 0 <= pos.row < 4 and 0 <= pos.col < 4
        assert any(n in occupied for n in pos.neighbors())
    assert Position(-1, 0) not in spaces
