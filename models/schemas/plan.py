from marshmallow import Schema, fields, validate, post_load

from models.plan import PLAN_INTERVALS
from models.schemas.common import not_blank


class PlanBaseSchema(Schema):
    name = fields.String(validate=not_blank(128))
    price_cents = fields.Integer(data_key="priceCents", strict=False, validate=validate.Range(min=0))
    currency = fields.String(validate=validate.Length(min=1, max=8))
    interval = fields.String(validate=validate.OneOf(PLAN_INTERVALS))
    active = fields.Boolean()

    @post_load
    def _strip(self, data, **kwargs):
        for key in ("name", "currency"):
            if key in data:
                data[key] = data[key].strip()
        return data


class PlanCreateSchema(PlanBaseSchema):
    name = fields.String(required=True, validate=not_blank(128))
    price_cents = fields.Integer(data_key="priceCents", required=True, strict=False, validate=validate.Range(min=0))
    currency = fields.String(load_default="INR", validate=validate.Length(min=1, max=8))
    interval = fields.String(load_default="MONTH", validate=validate.OneOf(PLAN_INTERVALS))
    active = fields.Boolean(load_default=True)


class PlanUpdateSchema(PlanBaseSchema):
    pass


class PlanOutSchema(Schema):
    id = fields.String()
    tenant_id = fields.String(data_key="tenantId")
    name = fields.String()
    price_cents = fields.Integer(data_key="priceCents")
    currency = fields.String()
    interval = fields.String()
    active = fields.Boolean()
    created_at = fields.DateTime(data_key="createdAt")
    updated_at = fields.DateTime(data_key="updatedAt")
