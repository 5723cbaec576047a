"""Personal records."""

import uuid

from fastapi import APIRouter, Depends

from forge.api.deps import get_store
from forge.core.enums import RecordType
from forge.models.personal_record import PersonalRecord
from forge.repositories.sqlalchemy_store import SqlAlchemyWorkoutStore
from forge.schemas.workout import PersonalRecordRead

router = APIRouter()


@router.get("", response_model=list[PersonalRecordRead])
async def list_records(
    exercise_id: uuid.UUID | None = None,
    record_type: RecordType | None = None,
    current_only: bool = False,
    store: SqlAlchemyWorkoutStore = Depends(get_store),
):
    """
    Record history, newest first. With current_only=true only the latest
    record per (exercise, record type) is returned, i.e. the standing bests.
    """
    criteria = []
    if exercise_id:
        criteria.append(PersonalRecord.exercise_id == exercise_id)
    if record_type:
        criteria.append(PersonalRecord.record_type == record_type)
    records = await store.fetch(PersonalRecord, *criteria, order_by=PersonalRecord.achieved_at.desc())
    if not current_only:
        return records
    seen: set[tuple[uuid.UUID, RecordType]] = set()
    standing = []
    for record in records:
        key = (record.exercise_id, record.record_type)
        if key not in seen:
            seen.add(key)
            standing.append(record)
    return standing
