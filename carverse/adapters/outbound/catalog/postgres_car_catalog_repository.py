"""Postgres-backed car catalog repository adapter."""

import re
from datetime import datetime, timezone
from typing import Any, Optional

from sqlalchemy import and_, false, func, or_, text, true
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlalchemy.orm import Session

from carverse.application.dtos.car import Car, CarDraft, Engine, Price
from carverse.application.errors import StoreUnavailable
from carverse.application.ports.car_catalog_repository import CarCatalogRepository
from carverse.domain.query.predicates import (
    And,
    CarField,
    Eq,
    In,
    Or,
    Predicate,
    Range,
    Regex,
    SortDirection,
    SortSpec,
    TextSearch,
)
from carverse.domain.value_objects.car_id import new_car_id
from carverse.infrastructure.db import get_db_session
from carverse.infrastructure.logging.logger import logger

from .models import CarModel, CarTagModel

_COLUMNS = {
    CarField.ID: CarModel.id,
    CarField.TITLE: CarModel.title,
    CarField.BRAND: CarModel.brand,
    CarField.MODEL: CarModel.model,
    CarField.BODY_TYPE: CarModel.body_type,
    CarField.FUEL_TYPE: CarModel.fuel_type,
    CarField.TRANSMISSION: CarModel.transmission,
    CarField.PRICE_MIN: CarModel.price_min,
    CarField.PRICE_MAX: CarModel.price_max,
    CarField.POWER_BHP: CarModel.power_bhp,
    CarField.MILEAGE: CarModel.mileage,
    CarField.LAUNCH_YEAR: CarModel.launch_year,
    CarField.DISCONTINUED: CarModel.discontinued,
    CarField.IS_FEATURED: CarModel.is_featured,
    CarField.CREATED_AT: CarModel.created_at,
}

_WORD = re.compile(r"\w+")


class PostgresCarCatalogRepository(CarCatalogRepository):
    """
    Postgres implementation of car catalog repository.

    Predicate trees are translated into SQLAlchemy expressions. Tags live in
    the car_tags table and are matched through EXISTS subqueries. Full-text
    search uses to_tsvector on Postgres and a word-boundary regexp match on
    other dialects (SQLite in tests).
    """

    def __init__(self) -> None:
        """Initialize Postgres repository."""
        pass

    def _model_to_dto(self, model: CarModel) -> Car:
        """
        Convert CarModel to Car DTO.

        Args:
            model: SQLAlchemy model instance

        Returns:
            Car DTO
        """
        # Ensure timestamps are timezone-aware (SQLite returns naive datetimes)
        created_at = model.created_at
        if created_at and created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=timezone.utc)
        updated_at = model.updated_at
        if updated_at and updated_at.tzinfo is None:
            updated_at = updated_at.replace(tzinfo=timezone.utc)

        return Car(
            id=model.id,
            title=model.title,
            brand=model.brand,
            model=model.model,
            body_type=model.body_type,
            fuel_type=model.fuel_type,
            transmission=model.transmission,
            drive_type=model.drive_type,
            engine=Engine.model_validate(model.engine or {}),
            power_bhp=model.power_bhp,
            torque_nm=model.torque_nm,
            top_speed=model.top_speed,
            zero_to_hundred=model.zero_to_hundred,
            mileage=model.mileage,
            range=model.range_km,
            price=Price(min=model.price_min, max=model.price_max, currency=model.price_currency),
            launch_year=model.launch_year,
            discontinued=model.discontinued,
            safety_rating=model.safety_rating,
            seating_capacity=model.seating_capacity,
            is_featured=model.is_featured,
            image=model.image,
            images=model.images or [],
            key_features=model.key_features or [],
            pros=model.pros or [],
            cons=model.cons or [],
            tags=[tag.tag for tag in model.tags],
            specs=model.specs or {},
            created_at=created_at,
            updated_at=updated_at,
        )

    def _draft_to_model(self, draft: CarDraft, now: datetime) -> CarModel:
        """
        Convert CarDraft to a new CarModel with fresh identity.

        Args:
            draft: Car draft
            now: Creation timestamp

        Returns:
            CarModel instance ready to add to a session
        """
        car_id = new_car_id()
        return CarModel(
            id=car_id,
            title=draft.title,
            brand=draft.brand,
            model=draft.model,
            body_type=draft.body_type.value,
            fuel_type=draft.fuel_type.value,
            transmission=draft.transmission.value,
            drive_type=draft.drive_type.value,
            engine=draft.engine.model_dump(mode="json"),
            power_bhp=draft.power_bhp,
            torque_nm=draft.torque_nm,
            top_speed=draft.top_speed,
            zero_to_hundred=draft.zero_to_hundred,
            mileage=draft.mileage,
            range_km=draft.range,
            price_min=draft.price.min,
            price_max=draft.price.max,
            price_currency=draft.price.currency,
            launch_year=draft.launch_year,
            discontinued=draft.discontinued,
            safety_rating=draft.safety_rating,
            seating_capacity=draft.seating_capacity,
            is_featured=draft.is_featured,
            image=draft.image,
            images=list(draft.images),
            key_features=list(draft.key_features),
            pros=list(draft.pros),
            cons=list(draft.cons),
            specs=dict(draft.specs),
            tags=[
                CarTagModel(car_id=car_id, position=position, tag=tag)
                for position, tag in enumerate(draft.tags)
            ],
            created_at=now,
            updated_at=now,
        )

    def _text_clause(self, query: str, dialect: str):
        """Any query word matches title, brand, model or a tag."""
        terms = sorted({word.lower() for word in _WORD.findall(query)})
        if not terms:
            return false()

        tag_match = CarModel.tags.any(CarTagModel.tag.in_(terms))
        if dialect == "postgresql":
            document = func.to_tsvector(
                "simple", CarModel.title + " " + CarModel.brand + " " + CarModel.model
            )
            tsquery = func.to_tsquery("simple", " | ".join(terms))
            return or_(document.op("@@")(tsquery), tag_match)

        word_matches = []
        for term in terms:
            for column in (CarModel.title, CarModel.brand, CarModel.model):
                word_matches.append(func.lower(column).regexp_match(rf"\b{re.escape(term)}\b"))
        return or_(*word_matches, tag_match)

    def _to_clause(self, predicate: Predicate, dialect: str):
        """
        Translate a predicate tree into a SQLAlchemy boolean expression.

        Args:
            predicate: Predicate tree
            dialect: Bound dialect name

        Returns:
            SQLAlchemy expression
        """
        if isinstance(predicate, And):
            if not predicate.children:
                return true()
            return and_(*(self._to_clause(child, dialect) for child in predicate.children))
        if isinstance(predicate, Or):
            if not predicate.children:
                return false()
            return or_(*(self._to_clause(child, dialect) for child in predicate.children))
        if isinstance(predicate, TextSearch):
            return self._text_clause(predicate.query, dialect)

        flags = "i" if isinstance(predicate, Regex) and predicate.case_insensitive else None

        if predicate.field is CarField.TAGS:
            if isinstance(predicate, Eq):
                return CarModel.tags.any(CarTagModel.tag == predicate.value)
            if isinstance(predicate, In):
                return CarModel.tags.any(CarTagModel.tag.in_(list(predicate.values)))
            if isinstance(predicate, Regex):
                return CarModel.tags.any(CarTagModel.tag.regexp_match(predicate.pattern, flags))
            raise TypeError(f"Unsupported tag predicate: {predicate!r}")

        column = _COLUMNS[predicate.field]
        if isinstance(predicate, Eq):
            return column == predicate.value
        if isinstance(predicate, Range):
            conditions = [column.is_not(None)]
            if predicate.gte is not None:
                conditions.append(column >= predicate.gte)
            if predicate.lte is not None:
                conditions.append(column <= predicate.lte)
            return and_(*conditions)
        if isinstance(predicate, In):
            return column.in_(list(predicate.values))
        if isinstance(predicate, Regex):
            return column.regexp_match(predicate.pattern, flags)

        raise TypeError(f"Unsupported predicate: {predicate!r}")

    def _order_by(self, sort: SortSpec):
        column = _COLUMNS[sort.field]
        if sort.direction is SortDirection.ASC:
            return column.asc().nulls_first()
        return column.desc().nulls_last()

    async def find(
        self,
        predicate: Predicate,
        sort: Optional[SortSpec] = None,
        skip: int = 0,
        limit: Optional[int] = None,
    ) -> tuple[list[Car], int]:
        """
        Find cars matching a predicate.

        Args:
            predicate: Filter predicate
            sort: Single-key sort order
            skip: Number of matching cars to skip
            limit: Maximum number of cars to return

        Returns:
            Tuple of (page of cars, total matching count before paging)
        """
        db: Session = get_db_session()
        try:
            clause = self._to_clause(predicate, db.get_bind().dialect.name)
            query = db.query(CarModel).filter(clause)
            total = query.count()

            if sort is not None:
                query = query.order_by(self._order_by(sort))
            query = query.offset(skip)
            if limit is not None:
                query = query.limit(limit)

            return [self._model_to_dto(model) for model in query.all()], total
        except OperationalError as e:
            logger.error(f"Database unavailable while finding cars: {str(e)}")
            raise StoreUnavailable() from e
        except SQLAlchemyError as e:
            logger.error(f"Database error while finding cars: {str(e)}")
            raise
        finally:
            db.close()

    async def count(self, predicate: Predicate) -> int:
        """
        Count cars matching a predicate.

        Args:
            predicate: Filter predicate

        Returns:
            Number of matching cars
        """
        db: Session = get_db_session()
        try:
            clause = self._to_clause(predicate, db.get_bind().dialect.name)
            return db.query(CarModel).filter(clause).count()
        except OperationalError as e:
            logger.error(f"Database unavailable while counting cars: {str(e)}")
            raise StoreUnavailable() from e
        except SQLAlchemyError as e:
            logger.error(f"Database error while counting cars: {str(e)}")
            raise
        finally:
            db.close()

    async def distinct(self, field: CarField) -> list[Any]:
        """
        Get distinct non-null values of a field.

        Args:
            field: Field to collect

        Returns:
            Distinct values
        """
        column = CarTagModel.tag if field is CarField.TAGS else _COLUMNS[field]
        db: Session = get_db_session()
        try:
            rows = db.query(column).filter(column.is_not(None)).distinct().all()
            return [row[0] for row in rows]
        except OperationalError as e:
            logger.error(f"Database unavailable while reading distinct {field.value}: {str(e)}")
            raise StoreUnavailable() from e
        except SQLAlchemyError as e:
            logger.error(f"Database error while reading distinct {field.value}: {str(e)}")
            raise
        finally:
            db.close()

    async def find_by_id(self, car_id: str) -> Optional[Car]:
        """
        Get a car by identifier.

        Args:
            car_id: Car identifier

        Returns:
            Car DTO, or None if not found
        """
        db: Session = get_db_session()
        try:
            model = db.query(CarModel).filter(CarModel.id == car_id).first()
            if model is None:
                return None
            return self._model_to_dto(model)
        except OperationalError as e:
            logger.error(f"Database unavailable while getting car {car_id}: {str(e)}")
            raise StoreUnavailable() from e
        except SQLAlchemyError as e:
            logger.error(f"Database error while getting car {car_id}: {str(e)}")
            raise
        finally:
            db.close()

    async def find_by_ids(self, car_ids: list[str]) -> list[Car]:
        """
        Get cars by identifiers in one query.

        Args:
            car_ids: Car identifiers

        Returns:
            Cars found, in database order
        """
        if not car_ids:
            return []
        db: Session = get_db_session()
        try:
            models = db.query(CarModel).filter(CarModel.id.in_(list(set(car_ids)))).all()
            return [self._model_to_dto(model) for model in models]
        except OperationalError as e:
            logger.error(f"Database unavailable while getting cars {car_ids}: {str(e)}")
            raise StoreUnavailable() from e
        except SQLAlchemyError as e:
            logger.error(f"Database error while getting cars {car_ids}: {str(e)}")
            raise
        finally:
            db.close()

    async def insert_many(self, drafts: list[CarDraft]) -> list[Car]:
        """
        Bulk insert cars in one transaction.

        Args:
            drafts: Cars to insert

        Returns:
            Inserted cars
        """
        now = datetime.now(timezone.utc)
        db: Session = get_db_session()
        try:
            models = [self._draft_to_model(draft, now) for draft in drafts]
            db.add_all(models)
            db.commit()
            return [self._model_to_dto(model) for model in models]
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Database error while inserting {len(drafts)} cars: {str(e)}")
            raise
        finally:
            db.close()

    async def is_ready(self) -> bool:
        """
        Check database connectivity with a trivial query.

        Returns:
            True if the database answered
        """
        try:
            db: Session = get_db_session()
        except ValueError:
            # DATABASE_URL not configured
            return False
        try:
            db.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError as e:
            logger.warning(f"Database readiness check failed: {str(e)}")
            return False
        finally:
            db.close()
