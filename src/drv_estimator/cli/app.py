"""Main Typer application for DRV Estimator."""

import json
import re
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Annotated, Optional

import typer
from rich.panel import Panel
from rich.table import Table

from drv_estimator import __version__
from drv_estimator.cli.console import console, print_error, print_warning, setup_logging
from drv_estimator.config import get_settings
from drv_estimator.core.calculators import PensionCalculator, best_scenario, generate_scenarios
from drv_estimator.core.models import Configuration, Person, PensionResult, Recommendation, Sex
from drv_estimator.core.rules import (
    MIN_INSURANCE_PERIOD_ESPECIALLY_LONG_TERM,
    severe_disability_retirement_date,
    womens_early_retirement_date,
)
from drv_estimator.shared.exceptions import PensionEstimatorError
from drv_estimator.shared.formatters import (
    format_currency,
    format_date,
    format_duration,
    format_percentage,
    format_points,
)
from drv_estimator.shared.validators import (
    check_retirement_start,
    validate_amounts,
    validate_birth_date,
    validate_person,
)

app = typer.Typer(
    name="drv-estimator",
    help="Schätzung der gesetzlichen Rente (Deutsche Rentenversicherung)",
    add_completion=False,
    no_args_is_help=True,
)

DATE_FORMATS = ["%Y-%m-%d", "%d.%m.%Y"]


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"DRV Estimator v{__version__}")
        raise typer.Exit()


# German grouping without decimals, e.g. "3.000" or "1.250.000"
THOUSANDS_ONLY = re.compile(r"^-?\d{1,3}(\.\d{3})+$")


def _parse_decimal(value: str) -> Decimal:
    """Accept "3000", "3000.50", "3.000" and "3.000,50".

    A dot followed by exactly three digits groups thousands, as in German
    notation; decimals then need a comma.
    """
    text = str(value).strip()
    if "," in text:
        text = text.replace(".", "").replace(",", ".")
    elif THOUSANDS_ONLY.match(text):
        text = text.replace(".", "")
    try:
        return Decimal(text)
    except InvalidOperation:
        raise typer.BadParameter(f"Keine gültige Zahl: {value}")


@app.callback()
def main(
    version: Annotated[
        Optional[bool],
        typer.Option(
            "--version",
            "-V",
            help="Zeigt die Version und beendet",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Zeigt Zwischenwerte der Berechnung"),
    ] = False,
) -> None:
    """DRV Estimator - Schätzung der gesetzlichen Rente."""
    setup_logging("DEBUG" if verbose else get_settings().log_level)


def _build_inputs(
    birth_date: datetime,
    sex: Sex,
    income: Decimal,
    points: Decimal,
    occupational: Decimal,
    private: Decimal,
    start: Optional[datetime],
) -> tuple[Person, Configuration]:
    """Build the person and configuration, or print the issues and exit."""
    configuration = Configuration.default()
    issues = validate_amounts(income, points, occupational, private, configuration.contribution_ceiling)
    if issues:
        for issue in issues:
            print_error(issue.message)
        raise typer.Exit(1)

    person = Person(
        sex=sex,
        birth_date=birth_date,
        monthly_income=income,
        accrued_points=points,
        occupational_pension=occupational,
        private_pension=private,
    )
    configuration = configuration.update_parameters_for(person.birth_date)
    if start is not None:
        configuration = configuration.with_retirement_start(start.date())
    return person, configuration


def _check_inputs(person: Person, configuration: Configuration) -> None:
    """Print validation issues and exit, or print start warnings."""
    issues = validate_person(person, configuration)
    if issues:
        for issue in issues:
            print_error(issue.message)
        raise typer.Exit(1)

    if not configuration.uses_statutory_start:
        check = check_retirement_start(configuration.chosen_retirement_date, person.birth_date)
        if check.warning:
            print_warning(check.warning)


BirthDateArg = Annotated[
    datetime,
    typer.Argument(help="Geburtsdatum (TT.MM.JJJJ oder JJJJ-MM-TT)", formats=DATE_FORMATS),
]
SexOpt = Annotated[Sex, typer.Option("--sex", "-s", help="Geschlecht")]
IncomeOpt = Annotated[
    Decimal, typer.Option("--income", "-i", parser=_parse_decimal, help="Monatliches Bruttoeinkommen")
]
PointsOpt = Annotated[
    Decimal, typer.Option("--points", "-p", parser=_parse_decimal, help="Bisher erworbene Rentenpunkte")
]
OccupationalOpt = Annotated[
    Decimal, typer.Option("--occupational", parser=_parse_decimal, help="Betriebsrente (monatlich)")
]
PrivateOpt = Annotated[
    Decimal, typer.Option("--private", parser=_parse_decimal, help="Private Rente (monatlich)")
]


@app.command()
def calculate(
    birth_date: BirthDateArg,
    sex: SexOpt = Sex.MALE,
    income: IncomeOpt = Decimal("0"),
    points: PointsOpt = Decimal("0"),
    occupational: OccupationalOpt = Decimal("0"),
    private: PrivateOpt = Decimal("0"),
    start: Annotated[
        Optional[datetime],
        typer.Option("--start", help="Gewünschter Rentenbeginn", formats=DATE_FORMATS),
    ] = None,
    as_json: Annotated[
        bool,
        typer.Option("--json", help="Gibt das Ergebnis als JSON aus"),
    ] = False,
    as_text: Annotated[
        bool,
        typer.Option("--text", help="Gibt einen Textbericht zum Teilen aus"),
    ] = False,
) -> None:
    """Berechnet die voraussichtliche Rente."""
    try:
        person, configuration = _build_inputs(birth_date, sex, income, points, occupational, private, start)
        _check_inputs(person, configuration)

        result = PensionCalculator(configuration).compute_benefit(person)

        if as_json:
            console.print_json(json.dumps(result.to_export_dict()))
            return

        if as_text:
            console.print(result.to_text_report(), markup=False, highlight=False)
            return

        _display_result(result)

    except PensionEstimatorError as e:
        print_error(str(e))
        raise typer.Exit(1)


@app.command()
def scenarios(
    birth_date: BirthDateArg,
    sex: SexOpt = Sex.MALE,
    income: IncomeOpt = Decimal("0"),
    points: PointsOpt = Decimal("0"),
    occupational: OccupationalOpt = Decimal("0"),
    private: PrivateOpt = Decimal("0"),
) -> None:
    """Vergleicht verschiedene Zeitpunkte für den Rentenbeginn."""
    try:
        person, configuration = _build_inputs(birth_date, sex, income, points, occupational, private, None)
        _check_inputs(person, configuration)

        results = generate_scenarios(person, configuration)
        best = best_scenario(results)

        table = Table(show_header=True, header_style="bold", title="Szenarien")
        table.add_column("Szenario", style="cyan")
        table.add_column("Beginn")
        table.add_column("Abschlag", justify="right")
        table.add_column("Brutto", justify="right", style="currency")
        table.add_column("Netto", justify="right", style="currency")
        table.add_column("Bewertung")

        for scenario in results:
            r = scenario.result
            name = scenario.name + (" ★" if scenario is best else "")
            table.add_row(
                name,
                format_date(r.retirement_date),
                "-" if r.is_deduction_free else format_percentage(r.deduction_rate),
                format_currency(r.combined_gross),
                format_currency(r.estimated_net),
                _recommendation_label(scenario.recommendation),
            )

        console.print()
        console.print(table)
        for scenario in results:
            console.print(f"[muted]{scenario.name}: {scenario.description}[/muted]")

    except PensionEstimatorError as e:
        print_error(str(e))
        raise typer.Exit(1)


@app.command()
def thresholds(
    birth_date: BirthDateArg,
    sex: SexOpt = Sex.MALE,
) -> None:
    """Zeigt die gesetzlichen Altersgrenzen für ein Geburtsdatum."""
    valid, reason = validate_birth_date(birth_date.date())
    if not valid:
        print_error(reason)
        raise typer.Exit(1)

    configuration = Configuration.default().update_parameters_for(birth_date.date())
    birth = configuration.reference_birth_date

    table = Table(show_header=True, header_style="bold", title="Altersgrenzen")
    table.add_column("Rentenart", style="cyan")
    table.add_column("Frühester Beginn")

    table.add_row("Regelaltersrente", format_date(configuration.statutory_date))
    table.add_row(
        f"Abschlagsfrei nach {MIN_INSURANCE_PERIOD_ESPECIALLY_LONG_TERM} Beitragsjahren",
        format_date(configuration.earliest_deduction_free_date),
    )
    table.add_row("Schwerbehinderte Menschen", format_date(severe_disability_retirement_date(birth)))

    womens_date = womens_early_retirement_date(birth, sex)
    if womens_date is not None:
        table.add_row("Altersrente für Frauen", format_date(womens_date))

    console.print()
    console.print(table)


def _recommendation_label(recommendation: Recommendation) -> str:
    labels = {
        Recommendation.FAVORABLE: "[favorable]empfehlenswert[/favorable]",
        Recommendation.NEUTRAL: "[neutral]neutral[/neutral]",
        Recommendation.UNFAVORABLE: "[unfavorable]ungünstig[/unfavorable]",
    }
    return labels[recommendation]


def _display_result(result: PensionResult) -> None:
    """Render a calculation result."""
    if result.months_before_statutory > 0:
        timing = f"[warning]{format_duration(result.months_before_statutory)} vor der Regelaltersgrenze[/warning]"
    else:
        timing = "[success]Zur Regelaltersgrenze oder später[/success]"

    console.print()
    console.print(
        Panel.fit(
            f"[header]Rentenbeginn:[/header] {format_date(result.retirement_date)}\n"
            f"[header]Regelaltersgrenze:[/header] {format_date(result.statutory_date)}\n"
            f"[header]Abschlagsfrei ab ({MIN_INSURANCE_PERIOD_ESPECIALLY_LONG_TERM} Jahre):[/header] {format_date(result.earliest_deduction_free_date)}\n"
            f"{timing}",
            title="DRV Estimator - Rentenbeginn",
            border_style="blue",
        )
    )

    table = Table(show_header=False, box=None)
    table.add_column("Posten")
    table.add_column("Wert", justify="right")

    table.add_row("Rentenpunkte bisher", format_points(result.accrued_points))
    table.add_row("Rentenpunkte bis Rentenbeginn", format_points(result.projected_points))
    table.add_row("[value]Rentenpunkte gesamt[/value]", f"[value]{format_points(result.total_points)}[/value]")
    table.add_row("Theoretische Bruttorente", format_currency(result.theoretical_gross))
    if not result.is_deduction_free:
        table.add_row(
            f"Abschlag ({format_percentage(result.deduction_rate)})",
            f"[currency_negative]-{format_currency(result.deduction_amount)}[/currency_negative]",
        )
    table.add_row("Bruttorente", format_currency(result.actual_gross))
    table.add_row("Kranken- und Pflegeversicherung", f"-{format_currency(result.social_contributions)}")
    table.add_row("Einkommensteuer (geschätzt)", f"-{format_currency(result.tax_amount)}")
    if result.supplementary_total > 0:
        table.add_row("Zusatzrenten", f"+{format_currency(result.supplementary_total)}")
    table.add_row(
        "[value]Geschätzte Nettorente[/value]",
        f"[currency]{format_currency(result.estimated_net)}[/currency]",
    )

    console.print(table)
    console.print(
        "[muted]Unverbindliche Schätzung mit den Werten von "
        f"{result.configuration.validity_year}. "
        "Verbindliche Auskünfte erteilt die Deutsche Rentenversicherung.[/muted]"
    )


if __name__ == "__main__":
    app()
