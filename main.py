#!/usr/bin/env python3
"""
Social Media Societal Cost Calculator - Main Demo

It runs:
1. Baseline calculation at the research-consensus defaults
2. Uncertainty characterization of every parameter
3. Scenario comparison and application
4. Parameter updates with plausibility warnings
5. Community scaling and sensitivity analysis
"""

from socialcost import create_calculator
from socialcost.analysis import SensitivityAnalyzer, check_consistency
from socialcost.config import configure_logging, get_settings
from socialcost.core import PARAMETER_ORDER, RangeViolation, get_spec
from socialcost.core.formatting import format_currency, format_number, format_percentage
from socialcost.events import ChangeEvent


def print_results(results):
    print(f"  Mortality:                  {format_currency(results.mortality)}")
    print(f"  Mental health:              {format_currency(results.mental_health)}")
    print(f"  Healthcare & productivity:  {format_currency(results.healthcare_productivity)}")
    print(f"  Total:                      {format_currency(results.total)}")
    print(f"  Share of GDP:               {format_percentage(results.gdp_percentage, 2)}")


def run_baseline_demo(calculator):
    """Show the default result and its formulas."""
    print("=" * 60)
    print("BASELINE: RESEARCH CONSENSUS")
    print("=" * 60)
    print()

    results = calculator.results
    print_results(results)
    print()
    print("Formulas:")
    for component, formula in results.formulas.items():
        print(f"  {component:<25} {formula}")
    print()


def run_uncertainty_demo(calculator):
    """Show intervals and curve peaks for every parameter."""
    print("=" * 60)
    print("UNCERTAINTY")
    print("=" * 60)
    print()
    print(f"{'Parameter':<38} {'Value':<12} {'Likely range':<28} {'Source'}")
    print("-" * 90)

    for name in PARAMETER_ORDER:
        spec = get_spec(name)
        interval = calculator.confidence_interval(name)
        curve = calculator.curve(name, 300, 80)
        likely = f"[{interval.lower:,.6g}, {interval.upper:,.6g}]"
        print(
            f"{spec.label:<38} {calculator.formatted_parameter(name):<12} "
            f"{likely:<28} {interval.source.value} (peak x={curve.peak.x:,.4g})"
        )
    print()


def run_scenario_demo(calculator):
    """Compare and apply scenarios."""
    print("=" * 60)
    print("SCENARIOS")
    print("=" * 60)
    print()
    print(calculator.scenarios.format_comparison_markdown())
    print()

    calculator.on(
        ChangeEvent.SCENARIO_APPLIED,
        lambda event: print(f"  -> scenario applied: {event.scenario_name}")
    )

    calculator.apply_scenario("facebook_files")
    print_results(calculator.results)
    match = calculator.closest_scenario()
    print(f"  Closest scenario: {match.name} (similarity {match.similarity:.2f})")
    print()

    if not calculator.apply_scenario("does_not_exist"):
        print("  Unknown scenario rejected, parameters unchanged.")
    calculator.apply_scenario("reset")
    print()


def run_update_demo(calculator):
    """Update parameters, hit a bound and collect warnings."""
    print("=" * 60)
    print("PARAMETER UPDATES")
    print("=" * 60)
    print()

    calculator.on(
        ChangeEvent.SIGNIFICANT_CHANGE,
        lambda event: print(f"  -> significant change after {event.parameter} ({event.relative_change:.0%})")
    )

    calculator.update_parameter("depression", 12_000_000)
    print(f"  depression = {format_number(calculator.get_parameter('depression'))}: "
          f"total {format_currency(calculator.results.total)}")

    try:
        calculator.update_parameter("vsl", 25)
    except RangeViolation as e:
        print(f"  Rejected: {e}")

    calculator.update_parameters({"qol": 45, "yld": 7.5, "healthcare": 19_000})
    for warning in calculator.warnings():
        print(f"  Warning [{warning.severity.value}]: {warning.message}")

    calculator.reset()
    print()


def run_analysis_demo(calculator):
    """Community scaling, sensitivity and consistency."""
    print("=" * 60)
    print("ANALYSIS")
    print("=" * 60)
    print()

    impact = calculator.calculate_community_impact(1_000_000, region="Example County")
    print(f"  {impact.region} (population {impact.population:,}):")
    print(f"    Total cost:      {format_currency(impact.total_cost)}")
    print(f"    Affected people: {impact.affected_people:,}")
    print(f"    Excess deaths:   {impact.excess_deaths:,}")
    print()

    analyzer = SensitivityAnalyzer(calculator.calculation, calculator.parameters)
    print("  Sensitivity (low -> high bound):")
    for bar in analyzer.tornado()[:5]:
        print(f"    {bar.parameter:<14} {format_currency(bar.low_total):>8} -> "
              f"{format_currency(bar.high_total):>8}  swing {format_currency(bar.swing)}")
    print()

    report = check_consistency(calculator.parameters, calculator.calculation)
    print(f"  Consistency checks passed: {report.passed}")
    print()


def main():
    """Main entry point."""
    settings = get_settings()
    configure_logging(settings.log_level)

    print()
    print("+" + "=" * 58 + "+")
    print("|       SOCIAL MEDIA SOCIETAL COST CALCULATOR              |")
    print("+" + "=" * 58 + "+")
    print()

    calculator = create_calculator(settings)

    run_baseline_demo(calculator)
    run_uncertainty_demo(calculator)
    run_scenario_demo(calculator)
    run_update_demo(calculator)
    run_analysis_demo(calculator)

    print("=" * 60)
    print("DEMONSTRATION COMPLETE")
    print("=" * 60)
    print()


if __name__ == "__main__":
    main()
