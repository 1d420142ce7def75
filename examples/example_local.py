"""
Example usage of nested_table with a local DuckDB-backed record source.
"""
import asyncio

import pyarrow as pa

from nested_table.controller import NestedTableController
from nested_table.renderer import format_text
from nested_table.sources.ibis_source import IbisRecordSource


def build_source() -> IbisRecordSource:
    source = IbisRecordSource()
    source.load_arrow(pa.table({
        "id": [1, 2, 3, 4, 5],
        "title": ["Europe", "Asia", "France", "Paris", "Japan"],
        "body": ["region", "region", "country", "city", "country"],
        "parent_id": [None, None, 1, 3, 2],
    }))
    return source


async def main():
    controller = NestedTableController(build_source())
    await controller.load()

    print("\nInitial table (roots only):")
    print(format_text(controller.view().rows))

    # =================================================================
    # Expand Europe, then France inside it
    # =================================================================
    controller.toggle(1, 0)
    await controller.wait_for_fetches()
    controller.toggle(3, 1)
    await controller.wait_for_fetches()

    print("\nAfter expanding Europe > France:")
    print(format_text(controller.view().rows))

    # =================================================================
    # Collapse Europe: France keeps its own expansion state at level 1
    # =================================================================
    controller.toggle(1, 0)
    print("\nAfter collapsing Europe:")
    print(format_text(controller.view().rows))
    print(f"\nDataset holds {len(controller.dataset)} records")

    await controller.aclose()


if __name__ == "__main__":
    asyncio.run(main())
