# amc_core/catalog/api/views.py
from __future__ import annotations

from drf_spectacular.utils import extend_schema, extend_schema_view

from amc_core.catalog.api.serializers import BrandSerializer, CategorySerializer, ProductSerializer
from amc_core.catalog.models import Brand, Category, Product
from amc_core.common.views import MasterDataViewSet

_catalog_schema = extend_schema_view(
    list=extend_schema(tags=["Catalog"]),
    retrieve=extend_schema(tags=["Catalog"]),
    create=extend_schema(tags=["Catalog"]),
    partial_update=extend_schema(tags=["Catalog"]),
    destroy=extend_schema(tags=["Catalog"]),
)


@_catalog_schema
class BrandViewSet(MasterDataViewSet):
    queryset = Brand.objects.all()
    serializer_class = BrandSerializer
    filterset_fields = ["status"]
    search_fields = ["name"]


@_catalog_schema
class CategoryViewSet(MasterDataViewSet):
    queryset = Category.objects.all()
    serializer_class = CategorySerializer
    filterset_fields = ["status"]
    search_fields = ["name"]


@_catalog_schema
class ProductViewSet(MasterDataViewSet):
    queryset = Product.objects.select_related("brand", "category")
    serializer_class = ProductSerializer
    filterset_fields = ["status", "brand", "category"]
    search_fields = ["name", "details", "model"]
