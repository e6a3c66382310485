"""
Promotion Routes for Shopping Pricing
=====================================

Endpoints used by the add-to-list dialog to show what each candidate
promotion would save before the shopper picks one. The promotions are
fetched by the client from the data layer and sent in the request body.

Endpoints:
----------
- POST /promotions/calculate: Apply one promotion to one line
- POST /promotions/evaluate: Price all active candidates, best first

An inapplicable promotion is returned with status 200 and
is_applicable=false; not_applicable_reason is shown to the shopper as is.
"""

import logging
from typing import List

from fastapi import APIRouter, Request

from ..config import get_rate_limit_pricing
from ..rate_limit import limiter
from ..schemas.promotions import (
    PromotionCalculateRequest,
    PromotionCalculationOut,
    PromotionEvaluateRequest,
    PromotionEvaluationOut,
)
from ..services.promotions import (
    calculate_promotion_discount,
    describe_promotion,
    evaluate_promotions,
)


logger = logging.getLogger(__name__)

promotions_router = APIRouter(prefix="/promotions", tags=["Promotions"])


@promotions_router.post("/calculate", response_model=PromotionCalculationOut)
@limiter.limit(get_rate_limit_pricing)
def calculate_promotion(request: Request, body: PromotionCalculateRequest) -> PromotionCalculationOut:
    """Apply one promotion to one line."""
    result = calculate_promotion_discount(
        body.promotion.to_domain(),
        body.unit_price,
        body.quantity,
        body.context.to_domain(),
    )
    return PromotionCalculationOut.model_validate(result)


@promotions_router.post("/evaluate", response_model=List[PromotionEvaluationOut])
@limiter.limit(get_rate_limit_pricing)
def evaluate_candidate_promotions(
    request: Request,
    body: PromotionEvaluateRequest,
) -> List[PromotionEvaluationOut]:
    """Price every active candidate promotion and rank them best first."""
    evaluations = evaluate_promotions(
        [p.to_domain() for p in body.promotions],
        body.unit_price,
        body.quantity,
        body.context.to_domain(),
        today=body.today,
    )

    logger.info(
        "Evaluated %d of %d candidate promotions",
        len(evaluations),
        len(body.promotions),
    )

    return [
        PromotionEvaluationOut(
            promotion_id=e.promotion.id,
            description=describe_promotion(e.promotion),
            status=e.promotion.status,
            result=PromotionCalculationOut.model_validate(e.result),
        )
        for e in evaluations
    ]
