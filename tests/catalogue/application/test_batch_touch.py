"""Application tests for the best-effort batch timestamp refresh."""

from protean.exceptions import ExpectedVersionError
from protean.utils.globals import current_domain
from storefront.product.batch import touch_products
from storefront.product.product import Product


class ConflictingDomain:
    """Delegates to the active domain but loses the version race on one product."""

    def __init__(self, domain, conflicting_id):
        self._domain = domain
        self._conflicting_id = conflicting_id

    def process(self, command, asynchronous=True):
        if str(command.product_id) == self._conflicting_id:
            raise ExpectedVersionError(f"Wrong expected version for product {self._conflicting_id}")
        return self._domain.process(command, asynchronous=asynchronous)


class TestTouchProducts:
    def test_touches_every_product(self, create_product):
        ids = [create_product(name="Widget"), create_product(name="Gadget")]
        repo = current_domain.repository_for(Product)
        before = {pid: repo.get(pid).updated_at for pid in ids}

        result = touch_products(ids)

        assert result == {"success": True, "processed": 2}
        for pid in ids:
            assert repo.get(pid).updated_at >= before[pid]

    def test_unknown_ids_are_skipped(self, create_product):
        product_id = create_product()

        result = touch_products(["missing", product_id])

        assert result == {"success": True, "processed": 1}

    def test_version_conflicts_are_skipped(self, create_product, monkeypatch):
        contested = create_product(name="Widget")
        others = [create_product(name="Gadget"), create_product(name="Gizmo")]
        domain = current_domain._get_current_object()
        monkeypatch.setattr("storefront.product.batch.current_domain", ConflictingDomain(domain, str(contested)))

        result = touch_products([others[0], contested, others[1]])

        assert result == {"success": True, "processed": 2}

    def test_empty_batch(self):
        assert touch_products([]) == {"success": True, "processed": 0}
