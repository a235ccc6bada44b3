"""Generic CRUD base class shared by every table's singleton."""

from __future__ import annotations

from typing import Any, Dict, Generic, Optional, Type, TypeVar, Union

from pydantic import BaseModel
from sqlalchemy.orm import Session

from youniverse.database import Base


ModelType = TypeVar("ModelType", bound=Base)
CreateSchemaType = TypeVar("CreateSchemaType", bound=BaseModel)
UpdateSchemaType = TypeVar("UpdateSchemaType", bound=BaseModel)


def _as_dict(obj_in: Union[BaseModel, Dict[str, Any]]) -> Dict[str, Any]:
	if isinstance(obj_in, BaseModel):
		return obj_in.model_dump(exclude_unset=True)
	return dict(obj_in)


class CRUDBase(Generic[ModelType, CreateSchemaType, UpdateSchemaType]):
	"""Primary-key lookup, insert and partial update for one model.

	Subclasses add the table-specific queries; every write goes through `_save`.
	"""

	def __init__(self, model: Type[ModelType]):
		self.model = model

	def _save(self, db: Session, db_obj: ModelType) -> ModelType:
		"""Commit one object and reload server defaults; roll back on failure."""
		try:
			db.add(db_obj)
			db.commit()
			db.refresh(db_obj)
		except Exception:
			db.rollback()
			raise
		return db_obj

	def get(self, db: Session, id: Any) -> Optional[ModelType]:
		return db.get(self.model, id)

	def create(self, db: Session, *, obj_in: Union[CreateSchemaType, Dict[str, Any]]) -> ModelType:
		return self._save(db, self.model(**_as_dict(obj_in)))  # type: ignore[arg-type]

	def update(
		self,
		db: Session,
		*,
		db_obj: ModelType,
		obj_in: Union[UpdateSchemaType, Dict[str, Any]],
	) -> ModelType:
		"""Apply only the fields the caller set; unknown keys are ignored."""
		for field, value in _as_dict(obj_in).items():
			if hasattr(db_obj, field):
				setattr(db_obj, field, value)
		return self._save(db, db_obj)
