"""
Tests del constructor de listados: filtros, orden y paginación.
"""
from datetime import datetime, timedelta
from decimal import Decimal

import pytest

from app.core.exceptions import ValidationException
from app.crud.blog import blog as crud_blog
from app.crud.listing import Page, escape_like
from app.crud.product import product as crud_product
from app.schemas.listing import BlogFilterSpec, ProductFilterSpec, build_filter_spec


def ids(page):
    return [item.id for item in page.items]


class TestFilterSpec:
    def test_undefined_values_are_treated_as_missing(self):
        spec = build_filter_spec(
            ProductFilterSpec,
            search="undefined", category_id="undefined", per_page="undefined", page="undefined"
        )

        assert spec.search is None
        assert spec.category_id is None
        assert spec.per_page is None
        assert spec.page == 1

    def test_empty_strings_are_treated_as_missing(self):
        spec = build_filter_spec(ProductFilterSpec, search="", status="", page="")

        assert spec.search is None
        assert spec.status is None
        assert spec.page == 1

    def test_values_are_converted(self):
        spec = build_filter_spec(
            ProductFilterSpec,
            search="  panel ", category_id="3", status="true", sort_order="DESC", per_page="5", page="2"
        )

        assert spec.search == "panel"
        assert spec.category_id == 3
        assert spec.status is True
        assert spec.sort_order == "desc"
        assert spec.per_page == 5
        assert spec.page == 2

    def test_invalid_values_report_each_field(self):
        with pytest.raises(ValidationException) as exc_info:
            build_filter_spec(ProductFilterSpec, per_page="abc", page="0")

        assert "per_page" in exc_info.value.errors
        assert "page" in exc_info.value.errors

    def test_invalid_sort_order(self):
        with pytest.raises(ValidationException) as exc_info:
            build_filter_spec(ProductFilterSpec, sort_order="sideways")

        assert "sort_order" in exc_info.value.errors


def test_escape_like():
    assert escape_like("100%_a\\b") == "100\\%\\_a\\\\b"


def test_page_metadata():
    assert Page(items=[], total=0, page=1, per_page=15).total_pages == 0
    assert Page(items=[], total=15, page=1, per_page=15).total_pages == 1
    assert Page(items=[], total=23, page=1, per_page=10).total_pages == 3


class TestProductListing:
    def test_pagination_slices_results(self, db, make_product):
        for _ in range(23):
            make_product()

        first = crud_product.get_page(db, spec=ProductFilterSpec(per_page=10))
        last = crud_product.get_page(db, spec=ProductFilterSpec(per_page=10, page=3))
        beyond = crud_product.get_page(db, spec=ProductFilterSpec(per_page=10, page=5))

        assert first.total == 23
        assert first.total_pages == 3
        assert len(first.items) == 10
        assert len(last.items) == 3
        assert beyond.items == []
        assert beyond.total == 23

    def test_default_page_size(self, db, make_product):
        for _ in range(16):
            make_product()

        page = crud_product.get_page(db, spec=ProductFilterSpec())

        assert page.per_page == 15
        assert len(page.items) == 15
        assert page.total_pages == 2

    def test_default_sort_is_newest_first(self, db, make_product):
        created = [make_product().id for _ in range(3)]

        page = crud_product.get_page(db, spec=ProductFilterSpec())

        assert ids(page) == list(reversed(created))

    def test_ties_are_broken_by_insertion_order(self, db, make_product):
        cheap = make_product(price=Decimal("50.00"))
        first = make_product(price=Decimal("80.00"))
        second = make_product(price=Decimal("80.00"))

        page = crud_product.get_page(
            db, spec=ProductFilterSpec(sort_by="price", sort_order="desc")
        )

        assert ids(page) == [first.id, second.id, cheap.id]

    def test_unknown_sort_field_is_rejected(self, db, make_product):
        make_product()

        with pytest.raises(ValidationException) as exc_info:
            crud_product.get_page(db, spec=ProductFilterSpec(sort_by="password"))

        assert "sort_by" in exc_info.value.errors

    def test_search_matches_any_text_field(self, db, make_product):
        by_name = make_product(name="Inversor Híbrido")
        by_short = make_product(short_description="Compatible con inversor de red")
        make_product(name="Batería de litio")

        page = crud_product.get_page(db, spec=ProductFilterSpec(search="INVERSOR"))

        assert set(ids(page)) == {by_name.id, by_short.id}

    def test_search_wildcards_are_literal(self, db, make_product):
        percent = make_product(name="Descuento 100% solar")
        make_product(name="Panel 100 W solar")

        page = crud_product.get_page(db, spec=ProductFilterSpec(search="100%"))

        assert ids(page) == [percent.id]

    def test_search_combines_with_category(self, db, make_product, make_category):
        other = make_category(name="Baterías")
        match = make_product(name="Kit solar")
        make_product(name="Kit solar batería", category_id=other.id)

        page = crud_product.get_page(
            db, spec=ProductFilterSpec(search="kit", category_id=match.category_id)
        )

        assert ids(page) == [match.id]

    def test_category_filter_does_not_include_children(self, db, make_product, make_category, category):
        child = make_category(name="Paneles flexibles", parent_id=category.id)
        parent_product = make_product()
        make_product(category_id=child.id)

        page = crud_product.get_page(db, spec=ProductFilterSpec(category_id=category.id))

        assert ids(page) == [parent_product.id]

    def test_featured_and_stock_flags(self, db, make_product):
        featured = make_product(is_featured=True)
        sold_out = make_product(is_featured=True, stock_quantity=0)
        make_product()

        all_featured = crud_product.get_page(db, spec=ProductFilterSpec(featured=True))
        in_stock = crud_product.get_page(db, spec=ProductFilterSpec(featured=True, in_stock=True))

        assert set(ids(all_featured)) == {featured.id, sold_out.id}
        assert ids(in_stock) == [featured.id]

    def test_inactive_products_need_privileged_listing(self, db, make_product):
        active = make_product()
        inactive = make_product(is_active=False)

        public = crud_product.get_page(db, spec=ProductFilterSpec())
        admin = crud_product.get_page(db, spec=ProductFilterSpec(), include_inactive=True)
        only_inactive = crud_product.get_page(
            db, spec=ProductFilterSpec(status=False), include_inactive=True
        )

        assert ids(public) == [active.id]
        assert set(ids(admin)) == {active.id, inactive.id}
        assert ids(only_inactive) == [inactive.id]

    def test_deleted_products_are_hidden(self, db, make_product):
        kept = make_product()
        deleted = make_product()
        crud_product.soft_delete(db, id=deleted.id)

        default = crud_product.get_page(db, spec=ProductFilterSpec(), include_inactive=True)
        with_deleted = crud_product.get_page(
            db, spec=ProductFilterSpec(), include_inactive=True, include_deleted=True
        )

        assert ids(default) == [kept.id]
        assert set(ids(with_deleted)) == {kept.id, deleted.id}


class TestBlogListing:
    def test_public_listing_hides_drafts_and_scheduled(self, db, make_blog):
        published = make_blog()
        make_blog(published=False)
        make_blog(published_at=datetime.utcnow() + timedelta(days=3))

        page = crud_blog.get_public_page(db, spec=BlogFilterSpec())

        assert ids(page) == [published.id]

    def test_public_listing_orders_by_publication_date(self, db, make_blog):
        older = make_blog(published_at=datetime.utcnow() - timedelta(days=10))
        newer = make_blog(published_at=datetime.utcnow() - timedelta(days=1))
        middle = make_blog(published_at=datetime.utcnow() - timedelta(days=5))

        page = crud_blog.get_public_page(db, spec=BlogFilterSpec())

        assert ids(page) == [newer.id, middle.id, older.id]
        assert page.per_page == 12

    def test_admin_listing_shows_everything_newest_first(self, db, make_blog):
        published = make_blog()
        draft = make_blog(published=False)
        scheduled = make_blog(published_at=datetime.utcnow() + timedelta(days=3))

        page = crud_blog.get_admin_page(db, spec=BlogFilterSpec())

        assert ids(page) == [scheduled.id, draft.id, published.id]
        assert page.per_page == 15

    def test_admin_status_and_author_filters(self, db, make_blog, make_user, admin_user):
        published = make_blog()
        make_blog(published=False)

        drafts_excluded = crud_blog.get_admin_page(db, spec=BlogFilterSpec(status=True))
        by_author = crud_blog.get_admin_page(db, spec=BlogFilterSpec(author_id=admin_user.id))
        by_other = crud_blog.get_admin_page(db, spec=BlogFilterSpec(author_id=make_user().id))

        assert ids(drafts_excluded) == [published.id]
        assert by_author.total == 2
        assert by_other.total == 0

    def test_search_over_excerpt(self, db, make_blog):
        match = make_blog(excerpt="Guía de mantenimiento")
        make_blog(excerpt="Noticias")

        page = crud_blog.get_public_page(db, spec=BlogFilterSpec(search="mantenimiento"))

        assert ids(page) == [match.id]
