# demo_inspect_properties.py
# Version: v1

r"""
Quick demo for the software component property inspector.

Usage (bash):

  export VRA_SERVER_URL=https://vra.example.com
  export VRA_ACCESS_TOKEN=...            # from your login step
  export VRA_TEST_PROPERTY=port          # optional, empty lists everything
  export VRA_TEST_EXACT=0
  python demo_inspect_properties.py
"""

import os

from vra_helpers_mcp.tools.tasks import inspect_software_component_properties


PROPERTY = os.environ.get("VRA_TEST_PROPERTY", "")
EXACT = os.environ.get("VRA_TEST_EXACT", "0").strip().lower() in {"1", "true", "yes", "on"}


def main() -> None:
    print("Calling task: inspect_software_component_properties()")
    print(f"Filter: {PROPERTY!r}  exact={EXACT}")
    print()

    result = inspect_software_component_properties(property_filter=PROPERTY, exact_match=EXACT)

    records = result.get("records", [])
    print(f"Properties returned: {len(records)}")
    for r in records:
        flags = [
            name
            for name in ("encrypted", "overrideable", "required", "computed")
            if r.get(name)
        ]
        print(
            f"- {r['component_name']}.{r['property_name']} "
            f"({r.get('type_id')}) = {r.get('value')!r}  {','.join(flags)}"
        )
    if not records:
        print("No matching properties found.")


if __name__ == "__main__":
    main()
