#!/usr/bin/env python3
"""
Complete Pipeline Demo: snapshot -> source -> every export format

Shows the full workflow:
1. Load the example snapshot into an in-memory source
2. List collections and pick a mode
3. Export in every format, raw values and alias names
4. Produce a minimized set
"""

import asyncio
import logging

from tokenexport.examples import build_example_snapshot
from tokenexport.exporter import list_collections, process_variables
from tokenexport.model import ExportFormat, MinimizedSetOptions, ValueFormat
from tokenexport.notices import NoticeLog
from tokenexport.serialization import InMemoryVariableSource


async def run():
    collections, variables = build_example_snapshot()
    source = InMemoryVariableSource(collections, variables)
    notices = NoticeLog()

    print("=" * 80)
    print("TOKEN EXPORT DEMO")
    print("=" * 80)

    # =========================================================================
    # STEP 1: Collections
    # =========================================================================
    print("\n1. COLLECTIONS...")
    available = await list_collections(source)
    for collection in available:
        modes = ", ".join(m.name for m in collection.modes)
        print(f"   ✓ {collection.name}: {len(collection.variable_ids)} variables ({modes})")

    theme = next(c for c in available if c.name == "Theme")
    dark = theme.get_mode_by_name("Dark")

    # =========================================================================
    # STEP 2: Every format
    # =========================================================================
    for value_format in ValueFormat:
        for export_format in ExportFormat:
            if export_format == ExportFormat.MINIMIZED_SET:
                continue
            print(f"\n2. {export_format.value.upper()} / {value_format.value}:")
            print("-" * 80)
            result = await process_variables(
                source, theme, dark, export_format, value_format, notifier=notices
            )
            print(result.text)
            print(f"   {notices.last}")

    # =========================================================================
    # STEP 3: Minimized set
    # =========================================================================
    print("\n3. MINIMIZED SET (structure: Light, values: Dark):")
    print("-" * 80)
    options = MinimizedSetOptions(
        structure_mode=theme.get_mode_by_name("Light"),
        value_mode=dark,
    )
    result = await process_variables(
        source, theme, dark, ExportFormat.MINIMIZED_SET, ValueFormat.RAW_VALUE, options,
        notifier=notices,
    )
    print(result.text)
    print(f"   {notices.last}")


def main():
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")
    asyncio.run(run())


if __name__ == "__main__":
    main()
