"""Tests for scenario export/import."""

import json
import tempfile
from pathlib import Path

import pytest

from src.export import (
    Scenario,
    dict_to_loan_config,
    import_scenario,
    list_example_scenarios,
    load_example_scenario,
    loan_config_to_dict,
    rows_to_csv,
    scenario_from_json,
    scenario_to_json,
)
from src.loan import DepositMode, LoanConfiguration
from src.mortgage import RepaymentType
from src.table import AffordabilityTable, DisplayRow


class TestLoanConfigSerialization:
    """Tests for LoanConfiguration dict conversion."""

    def test_enum_values_serialized(self):
        """Test that enums are written as their string values."""
        config = LoanConfiguration(
            deposit_mode=DepositMode.AMOUNT,
            repayment_type=RepaymentType.INTEREST_ONLY,
        )

        data = loan_config_to_dict(config)

        assert data['deposit_mode'] == 'amount'
        assert data['repayment_type'] == 'IO'
        json.dumps(data)

    def test_restores_configuration(self):
        """Test that a saved configuration loads back equal."""
        config = LoanConfiguration(
            interest_rate_percent=5.25,
            term_years=25,
            deposit_mode=DepositMode.AMOUNT,
            deposit_percent=10,
            deposit_amount=150000,
            repayment_type=RepaymentType.INTEREST_ONLY,
        )

        assert dict_to_loan_config(loan_config_to_dict(config)) == config

    def test_missing_fields_use_defaults(self):
        """Test that partial dictionaries fall back to defaults."""
        config = dict_to_loan_config({'interest_rate_percent': 7})

        assert config.interest_rate_percent == 7
        assert config.term_years == LoanConfiguration().term_years
        assert config.repayment_type == RepaymentType.PRINCIPAL_AND_INTEREST

    def test_unknown_enum_value(self):
        """Test that unknown repayment types are rejected."""
        with pytest.raises(ValueError):
            dict_to_loan_config({'repayment_type': 'balloon'})


class TestScenario:
    """Tests for scenario files."""

    def test_default_loan(self):
        """Test that scenarios default to the default configuration."""
        scenario = Scenario(name='Test', description='')

        assert scenario.config == LoanConfiguration()
        assert scenario.created_at is not None

    def test_file_export_import(self):
        """Test reading back a written scenario file."""
        config = LoanConfiguration(interest_rate_percent=4.5, term_years=20)
        scenario = Scenario(name='Low rate', description='Fixed 4.5%', loan=loan_config_to_dict(config))

        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / 'low_rate.json'
            path.write_text(scenario_to_json(scenario))
            loaded = import_scenario(str(path))

            saved = json.loads(path.read_text())

        assert loaded.name == 'Low rate'
        assert loaded.description == 'Fixed 4.5%'
        assert loaded.config == config
        assert saved['version'] == '1.0'

    def test_invalid_configuration_rejected(self):
        """Test that scenarios with invalid loans fail to import."""
        text = json.dumps({'name': 'Bad', 'loan': {'term_years': 0}})

        with pytest.raises(ValueError):
            scenario_from_json(text)

    def test_missing_name_rejected(self):
        """Test that scenarios need a name."""
        with pytest.raises(ValueError):
            scenario_from_json(json.dumps({'loan': {}}))

    def test_malformed_json_rejected(self):
        """Test that malformed JSON raises ValueError."""
        with pytest.raises(ValueError):
            scenario_from_json('{"name": ')

    def test_json_text(self):
        """Test scenario JSON contents."""
        data = json.loads(scenario_to_json(Scenario(name='A', description='B')))

        assert data['name'] == 'A'
        assert data['loan']['deposit_mode'] == 'percent'

    def test_list_example_scenarios(self):
        """Test listing scenario files in a directory."""
        with tempfile.TemporaryDirectory() as tmpdir:
            assert list_example_scenarios(str(Path(tmpdir) / 'missing')) == []

            (Path(tmpdir) / 'b.json').write_text('{}')
            (Path(tmpdir) / 'a.json').write_text('{}')
            (Path(tmpdir) / 'notes.txt').write_text('')

            assert list_example_scenarios(tmpdir) == ['a', 'b']

    def test_load_example_scenario(self):
        """Test loading an example scenario by name."""
        scenario = Scenario(
            name='Investor',
            description='Interest only',
            loan=loan_config_to_dict(LoanConfiguration(repayment_type=RepaymentType.INTEREST_ONLY)),
        )

        with tempfile.TemporaryDirectory() as tmpdir:
            (Path(tmpdir) / 'investor.json').write_text(scenario_to_json(scenario))

            assert list_example_scenarios(tmpdir) == ['investor']
            loaded = load_example_scenario('investor', tmpdir)

        assert loaded.name == 'Investor'
        assert loaded.config.repayment_type == RepaymentType.INTEREST_ONLY

    def test_bundled_examples_are_valid(self):
        """Test that every bundled example scenario imports cleanly."""
        examples_dir = str(Path(__file__).parent.parent / 'data' / 'examples')
        names = list_example_scenarios(examples_dir)

        assert names
        for name in names:
            scenario = load_example_scenario(name, examples_dir)
            scenario.config.validate()


class TestRowsToCsv:
    """Tests for CSV export of table rows."""

    def test_headers_and_rows(self):
        """Test CSV headers and row order."""
        table = AffordabilityTable([
            DisplayRow(postcode='2000', suburb='Sydney', ratio=0.62, rent=800, payment=1290),
            DisplayRow(postcode='2880', suburb='Broken Hill', ratio=None, rent=350, payment=None),
        ])

        lines = rows_to_csv(table).strip().splitlines()

        assert lines[0] == 'Suburbs,Postcode,Rent/Payment Ratio,Median Weekly Rent,Weekly Payment'
        assert lines[1].startswith('Sydney,2000,0.62')
        assert lines[2].startswith('Broken Hill,2880,')
        assert len(lines) == 3

    def test_subset(self):
        """Test exporting only the filtered rows."""
        table = AffordabilityTable([
            DisplayRow(postcode='2000', suburb='Sydney', ratio=0.62, rent=800, payment=1290),
            DisplayRow(postcode='2880', suburb='Broken Hill', ratio=None, rent=350, payment=None),
        ])

        lines = rows_to_csv(table, table.filter('broken')).strip().splitlines()

        assert len(lines) == 2
        assert lines[1].startswith('Broken Hill')
