from __future__ import annotations

import argparse
from pathlib import Path

from propconfig.core import keys
from propconfig.core.config_access import is_defined
from propconfig.core.io import load_document
from propconfig.propagation import dedup_dependent_variables, export_list_from_config, variable_id


def main() -> None:
    parser = argparse.ArgumentParser(
        description="List the dependent variables requested by the export section of a config document."
    )
    parser.add_argument("--config", type=Path, required=True, help="Path to YAML/JSON config")
    args = parser.parse_args()

    doc = load_document(args.config)
    if not is_defined(doc, keys.EXPORT):
        print("No export section defined")
        return
    for variable in dedup_dependent_variables(export_list_from_config(doc[keys.EXPORT])):
        print(variable_id(variable))


if __name__ == "__main__":
    main()
