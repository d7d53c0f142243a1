#!/usr/bin/env python3
"""
HealthPulse — Побудова моделі з CSV та пробна оцінка

Запуск:
    python scripts/build_model.py --data-dir ./data
    python scripts/build_model.py --data-dir ./data --age-bracket 1 --gender Female \
        --answer fever=Yes --answer cough=No
    python scripts/build_model.py --data-dir ./data --save-config config.yaml
"""

import sys
import argparse
import logging
from pathlib import Path

# Додаємо корінь проекту до path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from health_pulse.config import HealthPulseConfig, load_config, save_config
from health_pulse.inference import InferenceEngine
from health_pulse.schemas import PatientProfile
from health_pulse.statistics import FittedModel


def print_header(text):
    print("\n" + "=" * 60)
    print(f" {text}")
    print("=" * 60)


def parse_answer(raw: str):
    """'fever=Yes' → ('fever', 'Yes')"""
    if "=" not in raw:
        raise argparse.ArgumentTypeError(f"Expected symptom=Response, got {raw!r}")
    symptom, response = raw.split("=", 1)
    return symptom.strip(), response.strip()


def main():
    parser = argparse.ArgumentParser(description='HealthPulse model builder')
    parser.add_argument('--data-dir', required=True, help='Directory with CSV sources')
    parser.add_argument('--config', default=None, help='YAML config')
    parser.add_argument('--save-config', default=None, help='Save effective config to YAML')
    parser.add_argument('--age-bracket', type=int, default=None, help='Age bracket index')
    parser.add_argument('--gender', default=None, help='Patient gender')
    parser.add_argument('--answer', action='append', type=parse_answer, default=[],
                        help='symptom=Yes|No|Maybe|Not Sure (repeatable)')
    parser.add_argument('--top', type=int, default=5, help='How many results to print')
    parser.add_argument('--verbose', action='store_true', help='Debug logging')

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s"
    )

    config = load_config(args.config) if args.config else HealthPulseConfig()

    print_header("HealthPulse — Побудова моделі")
    model = FittedModel.from_directory(args.data_dir, config)
    print(f"✓ {model}")

    print("\nВікові групи:")
    for i, bracket in enumerate(model.age_brackets):
        print(f"  [{i}] {bracket.label:<16} записів: {bracket.total_records}")

    print(f"\nПитання ({len(model.questions)}):")
    for i, question in enumerate(model.questions, 1):
        print(f"  {i:2d}. [{question.kind.value:<9}] {question.text}")

    if args.save_config:
        save_config(config, args.save_config)
        print(f"\n✓ Конфігурацію збережено: {args.save_config}")

    if args.age_bracket is None or not args.gender:
        return

    print_header("Пробна оцінка")
    profile = PatientProfile(
        age_bracket=model.bracket(args.age_bracket),
        gender=args.gender,
    )
    for symptom, response in args.answer:
        model.questions.get(symptom)  # UnknownSymptomError для симптому поза анкетою
        profile.answer(symptom, response)

    engine = InferenceEngine(model)
    results = engine.predict(profile)

    for i, result in enumerate(results[:args.top], 1):
        print(
            f"  {i}. {result.disease_name:<30} {result.probability_percent:6.2f}%  "
            f"(cases: {result.case_count}, matched: {result.matched_symptom_count})"
        )

    print()
    print(engine.explain(profile, results))


if __name__ == "__main__":
    main()
