from marshmallow import Schema, fields, post_load, validates_schema, ValidationError
from models.schemas.common import not_blank


def _normalize_slug(value: str) -> str:
    return value.strip().lower()


class TenantCreateSchema(Schema):
    name = fields.String(required=True, validate=not_blank(128))
    slug = fields.String(required=True, validate=not_blank(128))

    @post_load
    def _normalize(self, data, **kwargs):
        data["name"] = data["name"].strip()
        data["slug"] = _normalize_slug(data["slug"])
        return data


class TenantUpdateSchema(Schema):
    name = fields.String(validate=not_blank(128))
    slug = fields.String(validate=not_blank(128))

    @validates_schema
    def _require_one(self, data, **kwargs):
        if not data:
            raise ValidationError("Provide at least one field to update (name or slug)")

    @post_load
    def _normalize(self, data, **kwargs):
        if "name" in data:
            data["name"] = data["name"].strip()
        if "slug" in data:
            data["slug"] = _normalize_slug(data["slug"])
        return data


class TenantOutSchema(Schema):
    id = fields.String()
    name = fields.String()
    slug = fields.String()
    created_at = fields.DateTime(data_key="createdAt")
    updated_at = fields.DateTime(data_key="updatedAt")
