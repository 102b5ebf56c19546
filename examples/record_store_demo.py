"""Basic example: use the task record store directly, without HTTP."""

from __future__ import annotations

import asyncio

from tasktrack import Database, DbAddress, NotFoundError, TaskManager, TaskPatch, TaskRepository, TaskStatus


async def main() -> None:
    """Create, update, list and delete tasks against an in-memory database."""
    db = Database(DbAddress.memory())
    await db.init()

    try:
        async with db.session() as session:
            manager = TaskManager(TaskRepository(session))

            first = await manager.insert(TaskPatch(name="Write the report"))
            second = await manager.insert(TaskPatch(name="Review the report", status=TaskStatus.CLOSED))
            assert first.status == TaskStatus.OPEN

            renamed = await manager.update(first.id, TaskPatch(name="Write the final report"))
            assert renamed.creation_time == first.creation_time

            for task in await manager.list_all():
                print(f"#{task.id} [{task.status}] {task.name} (created {task.creation_time.isoformat()})")

            await manager.delete(second.id)
            try:
                await manager.get(second.id)
            except NotFoundError as e:
                print(f"✓ {e.message}")
    finally:
        await db.dispose()


if __name__ == "__main__":
    asyncio.run(main())
