from marshmallow import Schema, fields, validate, post_load
from warehouse_service.models import MovementType
from warehouse_service.services.movement_service import MovementLine, MovementRequest


class CategoryRequestSchema(Schema):
    """Schema for creating categories"""
    name = fields.Str(required=True, validate=validate.Length(min=1, max=100))
    description = fields.Str(allow_none=True)


class CategoryResponseSchema(Schema):
    """Schema for category responses"""
    id = fields.Str(dump_only=True)
    name = fields.Str()
    description = fields.Str(allow_none=True)


class ProductRequestSchema(Schema):
    """Schema for creating/updating products"""
    code = fields.Str(required=True, validate=validate.Length(min=1, max=50))
    name = fields.Str(required=True, validate=validate.Length(min=1, max=200))
    description = fields.Str(allow_none=True)
    category_id = fields.Str(allow_none=True)
    unit = fields.Str(required=True, validate=validate.Length(min=1, max=20))
    min_stock = fields.Int(strict=True, validate=validate.Range(min=0), load_default=0)
    standard_cost = fields.Decimal(places=2, validate=validate.Range(min=0), load_default=0)
    is_active = fields.Bool(load_default=True)


class ProductResponseSchema(Schema):
    """Schema for product responses"""
    id = fields.Str(dump_only=True)
    code = fields.Str()
    name = fields.Str()
    description = fields.Str(allow_none=True)
    category_id = fields.Str(allow_none=True)
    unit = fields.Str()
    min_stock = fields.Int()
    standard_cost = fields.Str()  # Already converted to a 2-place string
    is_active = fields.Bool()
    created_at = fields.Str(dump_only=True)  # Already converted to ISO string


class WarehouseRequestSchema(Schema):
    """Schema for creating/updating warehouses"""
    code = fields.Str(required=True, validate=validate.Length(min=1, max=50))
    name = fields.Str(required=True, validate=validate.Length(min=1, max=200))
    location = fields.Str(allow_none=True, validate=validate.Length(max=255))
    manager = fields.Str(allow_none=True, validate=validate.Length(max=100))
    is_active = fields.Bool(load_default=True)


class WarehouseResponseSchema(Schema):
    """Schema for warehouse responses"""
    id = fields.Str(dump_only=True)
    code = fields.Str()
    name = fields.Str()
    location = fields.Str(allow_none=True)
    manager = fields.Str(allow_none=True)
    is_active = fields.Bool()
    created_at = fields.Str(dump_only=True)


class StockEntryResponseSchema(Schema):
    """Schema for stock rows with their joins"""
    id = fields.Str(dump_only=True)
    product_id = fields.Str()
    warehouse_id = fields.Str()
    quantity = fields.Int()
    last_updated = fields.Str(allow_none=True)
    product = fields.Nested(ProductResponseSchema, allow_none=True)
    warehouse = fields.Nested(WarehouseResponseSchema, allow_none=True)
    category = fields.Nested(CategoryResponseSchema, allow_none=True)


class LowStockAlertResponseSchema(StockEntryResponseSchema):
    """Schema for low-stock alerts"""
    min_stock = fields.Int()
    shortage = fields.Int()


class MovementLineRequestSchema(Schema):
    """Schema for one movement line"""
    product_id = fields.Str(required=True, validate=validate.Length(min=1))
    quantity = fields.Int(required=True, strict=True)
    unit_cost = fields.Decimal(places=2, allow_none=True)

    @post_load
    def make_line(self, data, **kwargs):
        return MovementLine(**data)


class MovementRequestSchema(Schema):
    """Schema for posting movements"""
    type = fields.Str(
        required=True,
        validate=validate.OneOf([mt.value for mt in MovementType])
    )
    warehouse_id = fields.Str(required=True, validate=validate.Length(min=1))
    warehouse_destination_id = fields.Str(allow_none=True)
    reason = fields.Str(allow_none=True, validate=validate.Length(max=500))
    notes = fields.Str(allow_none=True, validate=validate.Length(max=1000))
    total_value = fields.Decimal(places=2, allow_none=True)
    details = fields.List(
        fields.Nested(MovementLineRequestSchema),
        required=True,
        validate=validate.Length(min=1, max=500)
    )

    @post_load
    def make_request(self, data, **kwargs):
        return MovementRequest(**data)


class MovementDetailResponseSchema(Schema):
    """Schema for movement line responses"""
    id = fields.Str(dump_only=True)
    movement_id = fields.Str()
    line_number = fields.Int()
    product_id = fields.Str()
    quantity = fields.Int()
    unit_cost = fields.Str()


class MovementResponseSchema(Schema):
    """Schema for movement responses"""
    id = fields.Str(dump_only=True)
    folio = fields.Str()
    type = fields.Str()
    warehouse_id = fields.Str()
    warehouse_destination_id = fields.Str(allow_none=True)
    user_id = fields.Str()
    reason = fields.Str(allow_none=True)
    notes = fields.Str(allow_none=True)
    status = fields.Str()
    total_value = fields.Str()
    created_at = fields.Str(dump_only=True)
    details = fields.List(fields.Nested(MovementDetailResponseSchema))
