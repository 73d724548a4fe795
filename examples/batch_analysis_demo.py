#!/usr/bin/env python3
"""
Demonstration of batch gender analysis with the offline heuristic.

Runs the built-in sample list through PredictionPipeline, re-analyzes
the unknown and low-confidence entries, and prints the summary.
"""

from gender_analyzer import (
    SAMPLE_NAMES,
    PredictionPipeline,
    ProviderConfig,
    ReanalysisFilter,
    predict_gender,
    summarize_results,
    to_tsv_text,
)


def main():
    """Demonstrate single-name prediction and a batch run."""
    print("Gender Analyzer - Batch Analysis Demo")
    print("=" * 50)
    print()

    print("Example 1: Single names")
    print("-" * 50)
    for name in ["Dr. Alexander Bethke-Jaenicke", "J. K. Rowling", "Anastasia Bauer"]:
        outcome = predict_gender(name)
        print(f"{name:<32} {outcome.gender:<8} {outcome.confidence}%")
    print()

    print("Example 2: Sample list")
    print("-" * 50)

    def show(index, total, result):
        print(f"[{index + 1:>2}/{total}] {result.name:<32} {result.gender:<8} {result.confidence}%")

    pipeline = PredictionPipeline(delay=0, reanalysis_delay=0, on_result=show)
    pipeline.start(SAMPLE_NAMES + ["Pat Doe", "Gordon Lee"], ProviderConfig("simple"))
    print()

    print("Example 3: Re-analysis of unknown and low-confidence entries")
    print("-" * 50)
    pipeline.reanalyze(ReanalysisFilter(unknown=True, low_confidence=True), ProviderConfig("simple"))
    print()

    summary = summarize_results(pipeline.results)
    print(f"{summary['male']} male, {summary['female']} female, {summary['unknown']} unknown "
          f"({summary['total']} total, {summary['reanalyzed']} re-analyzed)")
    print()
    print(to_tsv_text(pipeline.results))


if __name__ == "__main__":
    main()
