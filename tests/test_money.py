from million_planner.core.money import round_currency


def test_half_cent_rounds_up_despite_representation_error():
    """1.005 is stored just below 1.005; plain round() drops the half cent."""
    assert round(1.005, 2) == 1.0
    assert round_currency(1.005) == 1.01


def test_regular_values():
    assert round_currency(0.125) == 0.13
    assert round_currency(1.004) == 1.0
    assert round_currency(123.456) == 123.46
    assert round_currency(10.0) == 10.0
    assert round_currency(0.0) == 0.0


def test_negative_values_round_half_towards_positive():
    assert round_currency(-1.234) == -1.23
    assert round_currency(-1.236) == -1.24
    assert round_currency(-0.125) == -0.12
    assert round_currency(-1.005) == -1.0
