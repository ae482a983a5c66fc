# catalog_api/services/merge.py
from typing import Any, Dict, Iterable


def apply_changes(
    entity: Any, changes: Dict[str, Any], nullable: Iterable[str] = ()
) -> Dict[str, Any]:
    """
    Copy supplied fields of a partial update onto an entity.

    `changes` holds only the fields the client sent (``model_dump(exclude_unset=True)``).
    A None value clears the attribute only for fields listed in `nullable`;
    for the rest it means "leave unchanged".

    Returns the changes that were actually applied.
    """
    nullable = set(nullable)
    applied = {}
    for key, value in changes.items():
        if value is None and key not in nullable:
            continue
        setattr(entity, key, value)
        applied[key] = value
    return applied
