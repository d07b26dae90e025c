from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Any, Dict

from propconfig.core import keys
from propconfig.core.config_access import as_mapping, is_defined
from propconfig.core.io import load_document, write_document
from propconfig.core.logging_config import setup_logging
from propconfig.core.models import is_time_bound
from propconfig.ephemeris import TabulatedBodyStore
from propconfig.propagation import (
    decode_propagation_settings,
    encode_propagation_settings,
    export_list_from_config,
    export_settings_to_config,
    nearest_fixed_epoch,
    reset_dependent_variables,
    variable_id,
)


def _propagation_section(doc: Dict[str, Any]) -> Dict[str, Any]:
    if not is_defined(doc, keys.PROPAGATION):
        return doc
    section = as_mapping(doc[keys.PROPAGATION], (keys.PROPAGATION,))
    # Bodies are usually declared once at the document root.
    if not is_defined(section, keys.BODIES) and is_defined(doc, keys.BODIES):
        section[keys.BODIES] = doc[keys.BODIES]
    doc[keys.PROPAGATION] = section
    return section


def build_summary(settings, exports) -> Dict[str, Any]:
    grouped = settings.propagators_by_state_type()
    final_epoch = nearest_fixed_epoch(settings.termination)
    return {
        "propagator_count": len(settings.propagators),
        "state_types": {state_type.value: len(members) for state_type, members in grouped.items()},
        "state_size": int(settings.initial_states().size),
        "final_epoch": final_epoch if is_time_bound(final_epoch) else None,
        "print_interval": settings.print_interval if settings.has_print_interval else None,
        "export_files": [spec.output_file for spec in exports],
        "dependent_variables": [variable_id(v) for v in settings.dependent_variables or ()],
    }


def main() -> None:
    parser = argparse.ArgumentParser(description="Translate a propagation config document into propagator settings")
    parser.add_argument("--config", type=Path, default=Path("configs/example.yaml"), help="Path to YAML/JSON config")
    parser.add_argument("--out", type=Path, default=Path("outputs/propagation_settings.yaml"), help="Output path")
    parser.add_argument(
        "--reference-epoch",
        type=float,
        default=None,
        help="Epoch for ephemeris queries when the termination has no fixed epoch",
    )
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    args = parser.parse_args()

    setup_logging(getattr(logging, args.log_level))

    doc = load_document(args.config)
    propagation = _propagation_section(doc)
    body_store = TabulatedBodyStore.from_config(propagation)

    settings = decode_propagation_settings(propagation, body_store, reference_epoch=args.reference_epoch)

    exports = []
    if is_defined(doc, keys.EXPORT):
        exports = export_list_from_config(doc[keys.EXPORT])
        settings = reset_dependent_variables(settings, exports)

    encoded = encode_propagation_settings(settings)
    if exports:
        encoded[keys.EXPORT] = [export_settings_to_config(spec) for spec in exports]
    write_document(args.out, encoded)

    summary = build_summary(settings, exports)
    summary_path = args.out.with_name(args.out.stem + "_summary.json")
    summary_path.write_text(json.dumps(summary, indent=2), encoding="utf-8")

    print(json.dumps(summary, indent=2))
    print(f"Wrote {args.out}")
    print(f"Wrote {summary_path}")


if __name__ == "__main__":
    main()
