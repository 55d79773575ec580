import functools
import logging
from datetime import datetime

import click
import pandas as pd

from config.constants import LoanMethod, RiskLevel
from config.settings import (
    DEFAULT_PRINCIPAL_RATE_PER_PERIOD, DEFAULT_PERIODS,
    DEFAULT_DAILY_PENALTY_RATE, DEFAULT_FIXED_PENALTY,
    DEFAULT_NEGOTIATION_THRESHOLD, DEFAULT_BAD_DEBT_THRESHOLD,
    LOG_LEVEL, LOG_FORMAT,
)
from core.calculator import calc_loan_amounts, calc_lender_irr
from core.comparison import compare_loan_methods, summarize_overdue
from core.exceptions import LoanEngineError
from core.overdue import (
    calc_overdue_days,
    calc_overdue_fees,
    calc_risk_level,
    generate_collection_advice,
    calc_credit_score,
    derive_customer_status,
    assess_overdue,
)
from core.repayment import allocate_payment, check_settlement
from core.schedule_generator import generate_repayment_schedule, schedule_to_frame
from core.schema import LoanTerms
from utils.logging import setup_logging

logger = logging.getLogger(__name__)

METHOD_CHOICES = click.Choice([m.value for m in LoanMethod])
RISK_CHOICES = click.Choice([r.value for r in RiskLevel])


def _parse_day(value):
    if value is None:
        return datetime.today().date()
    try:
        return datetime.strptime(value, '%Y-%m-%d').date()
    except ValueError:
        raise click.BadParameter(f"expected YYYY-MM-DD, got {value!r}") from None


def engine_command(func):
    """Reports engine errors as click errors instead of tracebacks."""
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except LoanEngineError as exc:
            logger.error("%s failed: %s", func.__name__, exc)
            raise click.ClickException(str(exc)) from exc
    return wrapper


def loan_terms_options(func):
    """Shared options describing a loan's terms."""
    options = [
        click.option('--principal', type=str, required=True, help='Principal amount'),
        click.option('--interest-rate', type=str, required=True, help='Interest rate as a fraction, e.g. 0.15'),
        click.option('--loan-method', type=METHOD_CHOICES, default=LoanMethod.METHOD1.value, help='Loan method'),
        click.option('--deposit', type=str, default='0', help='Deposit (collateral) amount'),
        click.option('--upfront-fees', type=str, default='0', help='Upfront fees'),
        click.option('--principal-rate-per-period', type=str, default=str(DEFAULT_PRINCIPAL_RATE_PER_PERIOD),
                     help='method1: share of principal repaid each period'),
        click.option('--periods', type=int, default=DEFAULT_PERIODS, help='method2: number of periods'),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _terms(principal, interest_rate, loan_method, deposit, upfront_fees, principal_rate_per_period, periods):
    return LoanTerms(
        principal_amount=principal,
        interest_rate=interest_rate,
        loan_method=LoanMethod(loan_method),
        deposit_amount=deposit,
        upfront_fees=upfront_fees,
        principal_rate_per_period=principal_rate_per_period,
        periods=periods,
    )


@click.group()
@click.option('--log-level', default=LOG_LEVEL, help='Log level')
@click.option('--log-format', type=click.Choice(['standard', 'json']), default=LOG_FORMAT, help='Log format')
def cli(log_level, log_format):
    """A CLI for the loan back-office engine."""
    setup_logging(log_level, log_format)


@cli.command('calc-loan')
@loan_terms_options
@engine_command
def calc_loan(**kwargs):
    """Calculates disbursement, per-period payment, total repayment and profit."""
    comp = calc_loan_amounts(_terms(**kwargs))
    logger.debug("calculated loan: %s", comp)
    click.echo(f"Loan method: {comp.loan_method.value}")
    click.echo(f"Interest: {comp.interest}")
    click.echo(f"Received amount: {comp.received_amount}")
    click.echo(f"Payment per period: {comp.payment_per_period}")
    click.echo(f"Number of periods: {comp.number_of_periods}")
    click.echo(f"Total repayment: {comp.total_repayment}")
    click.echo(f"Profit: {comp.profit}")
    click.echo(f"Target amount: {comp.target_amount}")


@cli.command('generate-schedule')
@loan_terms_options
@click.option('--as-of', type=str, default=None, help='Generation date (YYYY-MM-DD), defaults to today')
@engine_command
def generate_schedule_command(as_of, **kwargs):
    """Generates a repayment schedule and outputs it as CSV."""
    schedule = generate_repayment_schedule(_terms(**kwargs), _parse_day(as_of))
    logger.info("generated %d installments", len(schedule))
    click.echo(schedule_to_frame(schedule).to_csv(index=False))


@cli.command('lender-irr')
@loan_terms_options
@engine_command
def lender_irr_command(**kwargs):
    """Calculates the lender's annualised IRR for a loan."""
    terms = _terms(**kwargs)
    comp = calc_loan_amounts(terms)
    schedule = generate_repayment_schedule(terms, _parse_day(None), comp)
    click.echo(f"Lender IRR: {calc_lender_irr(comp, schedule):.4f}%")


@cli.command('allocate-payment')
@click.option('--paid', type=str, required=True, help='Amount paid')
@click.option('--fees', type=str, default='0', help='Outstanding fees')
@click.option('--interest', type=str, default='0', help='Outstanding interest')
@click.option('--principal', type=str, default='0', help='Outstanding principal')
@click.option('--prepaid', type=str, default='0', help='Existing prepaid balance')
@engine_command
def allocate_payment_command(paid, fees, interest, principal, prepaid):
    """Allocates a payment across fees, interest, principal and prepaid credit."""
    allocation = allocate_payment(paid, fees, interest, principal, prepaid)
    click.echo(f"Fees: {allocation.fee_portion}")
    click.echo(f"Interest: {allocation.interest_portion}")
    click.echo(f"Principal: {allocation.principal_portion}")
    click.echo(f"Prepaid credit: {allocation.prepaid_credit}")
    click.echo(f"Prepaid balance: {allocation.updated_prepaid_balance}")


@cli.command('check-settlement')
@click.option('--interest', type=str, required=True, help='Outstanding interest')
@click.option('--principal', type=str, required=True, help='Outstanding principal')
@engine_command
def check_settlement_command(interest, principal):
    """Checks whether a loan is fully settled."""
    click.echo("settled" if check_settlement(interest, principal) else "outstanding")


@cli.command('overdue-days')
@click.option('--due-date', type=str, required=True, help='Due date (YYYY-MM-DD)')
@click.option('--paid', type=str, required=True, help='Amount paid')
@click.option('--required', 'required_amount', type=str, required=True, help='Amount required')
@click.option('--grace-days', type=int, default=0, help='Grace period in days')
@click.option('--today', type=str, default=None, help='Evaluation date (YYYY-MM-DD), defaults to today')
@engine_command
def overdue_days_command(due_date, paid, required_amount, grace_days, today):
    """Calculates the number of days an installment is overdue."""
    days = calc_overdue_days(due_date, paid, required_amount, _parse_day(today), grace_days)
    click.echo(f"Overdue days: {days}")


@cli.command('overdue-fees')
@click.option('--days', type=int, required=True, help='Overdue days')
@click.option('--amount', type=str, required=True, help='Overdue amount')
@click.option('--daily-rate', type=str, default=str(DEFAULT_DAILY_PENALTY_RATE), help='Daily penalty rate (%)')
@click.option('--fixed-penalty', type=str, default=str(DEFAULT_FIXED_PENALTY), help='Fixed penalty')
@engine_command
def overdue_fees_command(days, amount, daily_rate, fixed_penalty):
    """Calculates overdue penalty fees."""
    click.echo(f"Overdue fees: {calc_overdue_fees(days, amount, daily_rate, fixed_penalty)}")


@cli.command('risk-level')
@click.option('--days', type=int, required=True, help='Overdue days')
@click.option('--overdue-count', type=int, default=0, help='Historical overdue count')
@click.option('--blacklisted', is_flag=True, help='Customer is blacklisted')
def risk_level_command(days, overdue_count, blacklisted):
    """Calculates the risk level of a loan."""
    click.echo(calc_risk_level(days, overdue_count, blacklisted).value)


@cli.command('collection-advice')
@click.option('--days', type=int, required=True, help='Overdue days')
@click.option('--risk-level', type=RISK_CHOICES, required=True, help='Risk level')
def collection_advice_command(days, risk_level):
    """Generates collection advice."""
    advice = generate_collection_advice(days, risk_level)
    click.echo(f"Priority: {advice.priority.value}")
    click.echo(f"Methods: {', '.join(advice.methods)}")
    click.echo(f"Next action: {advice.next_action}")
    click.echo(f"Timeline: {advice.timeline}")


@cli.command('credit-score')
@click.option('--overdue-count', type=int, default=0, help='Historical overdue count')
@click.option('--max-overdue-days', type=int, default=0, help='Longest overdue period in days')
@click.option('--total-loans', type=int, default=0, help='Total number of loans')
@click.option('--successful-loans', type=int, default=0, help='Number of loans repaid successfully')
@click.option('--blacklisted', is_flag=True, help='Customer is blacklisted')
def credit_score_command(overdue_count, max_overdue_days, total_loans, successful_loans, blacklisted):
    """Calculates a customer's credit score (0-100)."""
    score = calc_credit_score(overdue_count, max_overdue_days, total_loans, successful_loans, blacklisted)
    click.echo(f"Credit score: {score}")


@cli.command('customer-status')
@click.option('--days', type=int, required=True, help='Overdue days')
@click.option('--negotiation-threshold', type=int, default=DEFAULT_NEGOTIATION_THRESHOLD)
@click.option('--bad-debt-threshold', type=int, default=DEFAULT_BAD_DEBT_THRESHOLD)
@engine_command
def customer_status_command(days, negotiation_threshold, bad_debt_threshold):
    """Derives a customer's status from overdue days."""
    click.echo(derive_customer_status(days, negotiation_threshold, bad_debt_threshold).value)


@cli.command('assess')
@click.option('--days', type=int, required=True, help='Overdue days')
@click.option('--amount', type=str, required=True, help='Overdue amount')
@click.option('--overdue-count', type=int, default=0, help='Historical overdue count')
@click.option('--max-overdue-days', type=int, default=0, help='Longest overdue period in days')
@click.option('--total-loans', type=int, default=0, help='Total number of loans')
@click.option('--successful-loans', type=int, default=0, help='Number of loans repaid successfully')
@click.option('--blacklisted', is_flag=True, help='Customer is blacklisted')
@click.option('--negotiation-threshold', type=int, default=DEFAULT_NEGOTIATION_THRESHOLD)
@click.option('--bad-debt-threshold', type=int, default=DEFAULT_BAD_DEBT_THRESHOLD)
@engine_command
def assess_command(days, amount, overdue_count, max_overdue_days, total_loans, successful_loans, blacklisted,
                   negotiation_threshold, bad_debt_threshold):
    """Assesses an overdue loan: fees, risk, advice, credit score and status."""
    result = assess_overdue(
        days, amount, overdue_count, max_overdue_days,
        total_loans, successful_loans, blacklisted,
        negotiation_threshold=negotiation_threshold,
        bad_debt_threshold=bad_debt_threshold,
    )
    click.echo(f"Overdue fee: {result.overdue_fee}")
    click.echo(f"Risk level: {result.risk_level.value}")
    click.echo(f"Collection priority: {result.collection_advice.priority.value}")
    click.echo(f"Collection methods: {', '.join(result.collection_advice.methods)}")
    click.echo(f"Credit score: {result.credit_score}")
    click.echo(f"Customer status: {result.customer_status.value}")


@cli.command('compare-methods')
@click.option('--principal', type=str, required=True, help='Principal amount')
@click.option('--interest-rate', type=str, required=True, help='Interest rate as a fraction')
@click.option('--deposit', type=str, default='0', help='Deposit (collateral) amount')
@click.option('--upfront-fees', type=str, default='0', help='Upfront fees')
@click.option('--principal-rate-per-period', type=str, default=str(DEFAULT_PRINCIPAL_RATE_PER_PERIOD))
@click.option('--periods', type=int, default=DEFAULT_PERIODS)
@engine_command
def compare_methods_command(principal, interest_rate, deposit, upfront_fees, principal_rate_per_period, periods):
    """Compares method1 (front-loaded interest) and method2 (equal installments)."""
    result = compare_loan_methods(
        principal, interest_rate, _parse_day(None),
        deposit, upfront_fees, principal_rate_per_period, periods,
    )
    for key in ("method1", "method2"):
        comp = result[key]["computation"]
        click.echo(f"--- {LoanMethod(key).label} ---")
        click.echo(f"Received amount: {comp.received_amount}")
        click.echo(f"Number of periods: {comp.number_of_periods}")
        click.echo(f"First installment: {result[key]['first_installment']}")
        click.echo(f"Total repayment: {comp.total_repayment}")
        click.echo(f"Profit: {comp.profit}")
        click.echo(f"Lender IRR: {result[key]['lender_irr']:.4f}%")
    click.echo(f"\nProfit difference: {result['profit_difference']}")


@cli.command('overdue-summary')
@click.option('--loans-file', type=click.Path(exists=True), required=True,
              help='CSV with overdue_days, overdue_amount, overdue_fees, risk_level columns')
def overdue_summary_command(loans_file):
    """Summarises overdue loans from a CSV file."""
    loans = pd.read_csv(loans_file)
    stats = summarize_overdue(loans)
    distribution = stats.pop("risk_distribution")
    for key, value in stats.items():
        click.echo(f"{key}: {value}")
    if not distribution.empty:
        click.echo("--- Risk distribution ---")
        click.echo(distribution.to_string(index=False))


if __name__ == "__main__":
    cli()
