"""
Demo: Evaluate the example scholarship segments against a few applicants.
"""

import json

from segrules.engine import create_evaluator
from segrules.examples import build_basic_segment, build_complex_segment, build_dynamic_segment
from segrules.serialization import segment_to_yaml


APPLICANTS = [
    {"age": 19, "country": "United States", "family_income": 30000,
     "has_sat_ii_english": True, "has_dependents": True},
    {"age": 0, "country": "Nigeria", "family_income": 300000,
     "has_sat_ii_english": False, "has_dependents": False},
    {"age": 20},
]


def print_result(applicant, result):
    print(f"  state:  {json.dumps(applicant)}")
    if "error" in result:
        print(f"  ERROR:  {result['error']}")
    else:
        passed = [r["name"] or "(unnamed)" for r in result["rules"] if r["passed"]]
        print(f"  passed: {', '.join(passed) or '-'}")
        print(f"  output: {json.dumps(result['output'])}")
    print()


def main():
    for build in (build_basic_segment, build_complex_segment):
        segment = build()
        evaluator = create_evaluator(segment, "demo")
        print("=" * 70)
        print(f"SEGMENT: {segment.name}")
        print("=" * 70)
        for applicant in APPLICANTS:
            print_result(applicant, evaluator(dict(applicant)))

    dynamic = build_dynamic_segment()
    print("=" * 70)
    print(f"SEGMENT: {dynamic.name} (YAML)")
    print("=" * 70)
    print(segment_to_yaml(dynamic))
    applicant = {
        "preferred_language": "French",
        "calculated_language_hours": 50,
        "country": "France",
        "family_income": 120000,
        "dynamic_income_low": 30000,
        "dynamic_income_high": 150000,
        "gpa": 3.8,
        "gpa_limit": 3.5,
    }
    print_result(applicant, create_evaluator(dynamic, "demo")(dict(applicant)))


if __name__ == "__main__":
    main()
