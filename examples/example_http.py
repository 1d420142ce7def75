"""
Example usage of nested_table against a JSON HTTP endpoint.

Defaults to the public JSONPlaceholder posts endpoint; set
NESTED_TABLE_API_URL to point somewhere else.
"""
import asyncio
import logging

from nested_table.config import config_manager
from nested_table.controller import NestedTableController
from nested_table.renderer import format_text


async def main():
    logging.basicConfig(level=logging.INFO)
    config = config_manager.load_config('env')
    controller = NestedTableController.from_config(config)

    await controller.load()
    view = controller.view()
    if view.error:
        print(view.error)
        await controller.aclose()
        return

    first = view.rows[0]
    print(f"Loaded {view.dataset_size} records, expanding row {first.id}")
    controller.toggle(first.id, 0)
    await controller.wait_for_fetches()

    print(format_text(controller.view().rows[:3]))
    await controller.aclose()


if __name__ == "__main__":
    asyncio.run(main())
