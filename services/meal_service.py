from typing import Any, Callable
from sqlalchemy.orm import Session
import logging

from domain.mappers import MealMapper
from domain.schemas.meal_schemas import MealRecordResponse
from repositories import MealRepository
from services.estimate_normalizer import normalize_estimate
from services.macro_estimator import MacroEstimator
from services.meal_validator import validate_submission, DEFAULT_MAX_LENGTH

logger = logging.getLogger("macrolog.meals")


class MealService:
    """Business logic for the meal-ingestion pipeline"""

    @staticmethod
    def log_meal(
        db: Session,
        user_id: str,
        payload: Any,
        estimator_factory: Callable[[], MacroEstimator],
        max_length: int = DEFAULT_MAX_LENGTH,
    ) -> MealRecordResponse:
        """
        Validate, estimate, normalize and persist one meal for ``user_id``.

        Stages run in order and any failure aborts the request; nothing is
        written unless a complete estimate was parsed. The estimator is only
        obtained once the payload is valid. Identical submissions produce
        separate records.

        Raises:
            InvalidInputError: payload rejected by the validator
            MissingCredentialError: estimator could not be built
            UpstreamUnavailableError: completion service failed
            MalformedEstimateError: completion could not be parsed
            PersistenceError: insert failed
        """
        submission = validate_submission(payload, max_length=max_length)

        raw = estimator_factory().request_estimate(submission.meal_text)
        estimate = normalize_estimate(raw)
        logger.debug(f"estimate_parsed user_id={user_id} estimate={estimate.model_dump()}")

        meal = MealRepository(db).create_meal(
            user_id=user_id,
            meal_type=submission.meal_type,
            text_entry=submission.meal_text,
            estimate=estimate,
        )
        logger.info(
            f"meal_logged user_id={user_id} meal_id={meal.id} "
            f"meal_type={meal.meal_type} calories={meal.calories}"
        )
        return MealMapper.to_response(meal)
