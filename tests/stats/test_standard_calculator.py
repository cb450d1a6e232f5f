from src.roster_sync.roster_sync.stats.calculator.standard_calculator import StandardDutyHoursCalculator


def test_standard_calculator_counts_full_shifts_only():
    calc = StandardDutyHoursCalculator()

    assert calc.total_hours(["1", "X", "P1", "2"]) == 36
    assert calc.total_hours(["NP1", "NP2", "U", "ZW", "S1", ""]) == 0
    assert calc.hours_for_code("n2") == 12


def test_standard_calculator_custom_shift_length():
    calc = StandardDutyHoursCalculator(hours_per_shift=8)
    assert calc.total_hours(["1", "2"]) == 16
