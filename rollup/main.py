# rollup/main.py
"""Main entry point for the allocation table"""
from typing import Dict, Any, List, Sequence
from rollup.config import DATASET_FILE, EDITS_FILE
from rollup.io import DataLoader
from rollup.allocation import AllocationEngine, AllocationValidator, flatten_dataset
from rollup.analysis import MetricsCalculator
from rollup.models import Row
from rollup.utils import categorize_validation_issues


class OutputFormatter:
    """Formats and displays the allocation table"""

    @staticmethod
    def print_results(rows: Sequence[Row], validation_issues: List[str],
                      metrics: Dict[str, Any]):
        """Pretty print the table and its checks"""
        print("\n" + "="*80)
        print("📋 ALLOCATION TABLE")
        print("="*80)

        OutputFormatter._print_table(rows)
        OutputFormatter._print_metrics(metrics)
        OutputFormatter._print_validation_breakdown(validation_issues)
        OutputFormatter._print_validation_issues(validation_issues)

        print("\n" + "="*80)

    @staticmethod
    def _print_table(rows: Sequence[Row]):
        """Print rows, groups first with their items indented"""
        print(f"\n{'Label':<34}{'Current':>14}{'Baseline':>14}{'Variance':>12}")
        print("-"*80)
        for row in rows:
            if row.is_group:
                print(f"\n{'▶ ' + row.label:<34}{row.value:>14,.2f}"
                      f"{row.base_value:>14,.2f}{row.variance_percent:>12}")
            else:
                print(f"{'   └─ ' + row.label:<34}{row.value:>14,.2f}"
                      f"{row.base_value:>14,.2f}{row.variance_percent:>12}")

    @staticmethod
    def _print_metrics(metrics: Dict[str, Any]):
        """Print metrics section"""
        print(f"\n📊 METRICS:")
        print(f"   Groups: {metrics.get('group_count', 0)} | Items: {metrics.get('item_count', 0)}")
        print(f"   Total Baseline: {metrics.get('total_base_value', 0):,.2f}")
        print(f"   Total Current: {metrics.get('total_value', 0):,.2f} "
              f"({metrics.get('total_variance_percent', '0%')})")
        print(f"   Groups Changed: {metrics.get('groups_changed', 0)}")
        print(f"   Items Changed: {metrics.get('items_changed', 0)}")

        increase = metrics.get('largest_increase')
        if increase:
            print(f"   Largest Increase: {increase['label']} (+{increase['change']:,.2f})")
        decrease = metrics.get('largest_decrease')
        if decrease:
            print(f"   Largest Decrease: {decrease['label']} ({decrease['change']:,.2f})")

    @staticmethod
    def _print_validation_breakdown(issues: List[str]):
        """Print validation issue breakdown"""
        issue_breakdown = categorize_validation_issues(issues)
        if any(issue_breakdown.values()):
            print(f"\n⚠️  VALIDATION ISSUE BREAKDOWN:")
            if issue_breakdown['rollup_mismatches'] > 0:
                print(f"   ⛔ Rollup Mismatches: {issue_breakdown['rollup_mismatches']}")
            if issue_breakdown['baseline_changes'] > 0:
                print(f"   ⛔ Baseline Changes: {issue_breakdown['baseline_changes']}")
            if issue_breakdown['duplicate_ids'] > 0:
                print(f"   ⛔ Duplicate Ids: {issue_breakdown['duplicate_ids']}")
            if issue_breakdown['ordering_errors'] > 0:
                print(f"   ⚠️  Ordering Errors: {issue_breakdown['ordering_errors']}")
            if issue_breakdown['orphaned_items'] > 0:
                print(f"   ℹ️  Orphaned Items: {issue_breakdown['orphaned_items']}")

    @staticmethod
    def _print_validation_issues(issues: List[str]):
        """Print validation issues"""
        if issues:
            print(f"\n❌ VALIDATION ISSUES ({len(issues)}):")
            print("-"*80)
            for issue in issues:
                print(f"   • {issue}")
        else:
            print(f"\n✅ No validation issues found!")


def apply_edits(engine: AllocationEngine, edits: List[Dict[str, Any]]) -> int:
    """Replay edits against the engine; returns how many changed the table"""
    applied = 0

    for edit in edits:
        row_index = edit['row'] if 'row' in edit else engine.index_of(edit['id'])
        if row_index is None:
            print(f"   ⚠️  Skipping edit for unknown row id {edit['id']}")
            continue

        after_input = engine.set_input(row_index, str(edit.get('input', '')))
        if edit['mode'] == 'percent':
            result = engine.allocate_by_percent(row_index)
        else:
            result = engine.allocate_by_value(row_index)

        if result is after_input:
            print(f"   ⚠️  Edit {edit} did not change the table")
        else:
            applied += 1

    return applied


def main():
    """Main entry point"""
    # Load data
    print("📂 Loading data...")
    groups = DataLoader.load_dataset(DATASET_FILE)
    baseline = flatten_dataset(groups)

    # Initialize allocation engine
    engine = AllocationEngine(baseline)

    # Replay edits, if any
    edits = DataLoader.load_edits(EDITS_FILE)
    if edits:
        print(f"\n✏️  Applying {len(edits)} edits...")
        applied = apply_edits(engine, edits)
        print(f"   Applied {applied}/{len(edits)} edits")

    # Validate against the original table
    validator = AllocationValidator(baseline)
    validation_issues = validator.validate(engine.rows, engine.pinned_group_ids)

    # Calculate metrics
    metrics = MetricsCalculator.calculate(engine.rows)

    # Display results
    OutputFormatter.print_results(engine.rows, validation_issues, metrics)


if __name__ == "__main__":
    main()
