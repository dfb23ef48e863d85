"""JSON export/import of loan scenarios and CSV export of the table."""

import json
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import List

from .data import DEFAULT_DATA_DIR
from .loan import DepositMode, LoanConfiguration
from .mortgage import RepaymentType
from .table import AffordabilityTable, DisplayRow


EXAMPLES_DIR = str(DEFAULT_DATA_DIR / 'examples')


def loan_config_to_dict(config: LoanConfiguration) -> dict:
    """Convert LoanConfiguration to serializable dictionary."""
    return {
        'interest_rate_percent': config.interest_rate_percent,
        'term_years': config.term_years,
        'deposit_mode': config.deposit_mode.value,
        'deposit_percent': config.deposit_percent,
        'deposit_amount': config.deposit_amount,
        'repayment_type': config.repayment_type.value,
    }


def dict_to_loan_config(data: dict) -> LoanConfiguration:
    """Convert dictionary to LoanConfiguration, filling gaps with defaults."""
    defaults = LoanConfiguration()
    return LoanConfiguration(
        interest_rate_percent=data.get('interest_rate_percent', defaults.interest_rate_percent),
        term_years=data.get('term_years', defaults.term_years),
        deposit_mode=DepositMode(data.get('deposit_mode', defaults.deposit_mode.value)),
        deposit_percent=data.get('deposit_percent', defaults.deposit_percent),
        deposit_amount=data.get('deposit_amount', defaults.deposit_amount),
        repayment_type=RepaymentType(data.get('repayment_type', defaults.repayment_type.value)),
    )


@dataclass
class Scenario:
    """Named loan configuration for saving/loading."""

    name: str
    description: str
    loan: dict = None
    created_at: str = None
    updated_at: str = None

    def __post_init__(self):
        if self.loan is None:
            self.loan = loan_config_to_dict(LoanConfiguration())
        if self.created_at is None:
            self.created_at = datetime.now().isoformat()
        self.updated_at = datetime.now().isoformat()

    @property
    def config(self) -> LoanConfiguration:
        return dict_to_loan_config(self.loan)


def scenario_to_json(scenario: Scenario) -> str:
    data = {
        'name': scenario.name,
        'description': scenario.description,
        'loan': scenario.loan,
        'created_at': scenario.created_at,
        'updated_at': datetime.now().isoformat(),
        'version': '1.0',
    }
    return json.dumps(data, indent=2)


def scenario_from_json(text: str) -> Scenario:
    """Parse a scenario, validating its loan configuration.

    Raises:
        ValueError: If the JSON is malformed or the configuration is invalid
    """
    data = json.loads(text)
    if 'name' not in data:
        raise ValueError("Scenario is missing a name")

    scenario = Scenario(
        name=data['name'],
        description=data.get('description', ''),
        loan=data.get('loan'),
        created_at=data.get('created_at'),
    )
    scenario.config.validate()
    return scenario


def import_scenario(filepath: str) -> Scenario:
    """Import scenario from JSON file."""
    with open(filepath, 'r') as f:
        return scenario_from_json(f.read())


def list_example_scenarios(examples_dir: str = EXAMPLES_DIR) -> List[str]:
    """List available example scenario files."""
    path = Path(examples_dir)
    if not path.exists():
        return []
    return sorted(f.stem for f in path.glob('*.json'))


def load_example_scenario(name: str, examples_dir: str = EXAMPLES_DIR) -> Scenario:
    """Load an example scenario by name."""
    filepath = Path(examples_dir) / f"{name}.json"
    return import_scenario(str(filepath))


def rows_to_csv(table: AffordabilityTable, rows: List[DisplayRow] = None) -> str:
    """CSV text of the given rows (default: all rows in table order)."""
    df = table.to_dataframe(rows)
    df = df.rename(columns={
        'suburb': 'Suburbs',
        'postcode': 'Postcode',
        'ratio': 'Rent/Payment Ratio',
        'rent': 'Median Weekly Rent',
        'payment': 'Weekly Payment',
    })
    return df.to_csv(index=False)
