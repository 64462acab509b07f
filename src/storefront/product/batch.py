"""Best-effort batch refresh of product timestamps.

Unlike order placement this is not all-or-nothing: every product is touched in
its own unit of work, and a failure on one id is logged and skipped.
"""

import structlog
from protean.exceptions import ProteanException
from protean.utils.globals import current_domain

from storefront.product.management import TouchProduct

logger = structlog.get_logger(__name__)


def touch_products(product_ids) -> dict:
    processed = 0
    for product_id in product_ids:
        try:
            current_domain.process(TouchProduct(product_id=product_id), asynchronous=False)
        except ProteanException as exc:
            logger.warning("product_touch_skipped", product_id=str(product_id), error=str(exc))
            continue
        processed += 1

    logger.info("products_touched", requested=len(product_ids), processed=processed)
    return {"success": True, "processed": processed}
