from __future__ import annotations

from flask import Blueprint, request, jsonify, abort

from auth.decorators import jwt_required
from models import storage
from models.tenant import Tenant
from models.schemas.tenant import (
    TenantCreateSchema,
    TenantUpdateSchema,
    TenantOutSchema,
)
from .utils.pagination import parse_pagination

bp = Blueprint("tenants", __name__)

create_schema = TenantCreateSchema()
update_schema = TenantUpdateSchema()
out_schema = TenantOutSchema()
out_list_schema = TenantOutSchema(many=True)


def slug_taken(session, slug: str, exclude_id: str | None = None) -> bool:
    q = session.query(Tenant).filter(Tenant.slug == slug)
    if exclude_id:
        q = q.filter(Tenant.id != exclude_id)
    return session.query(q.exists()).scalar()


def get_tenant_or_404(tenant_id: str) -> Tenant:
    tenant = storage.get(Tenant, tenant_id)
    if not tenant:
        abort(404, description="Tenant not found")
    return tenant


@bp.get("/tenants")
def list_tenants():
    """
    List tenants, newest first
    ---
    tags: [Tenants]
    parameters:
      - in: query
        name: page
        type: integer
        default: 1
      - in: query
        name: limit
        type: integer
        default: 20
    responses:
      200: { description: OK }
    """
    session = storage.get_session()
    page, limit = parse_pagination()
    query = session.query(Tenant)
    total = query.count()
    rows = (
        query.order_by(Tenant.created_at.desc())
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )
    return jsonify({"data": out_list_schema.dump(rows), "meta": {"page": page, "limit": limit, "total": total}})


@bp.get("/tenants/<tenant_id>")
def get_tenant(tenant_id: str):
    """
    Get a tenant by id
    ---
    tags: [Tenants]
    parameters:
      - in: path
        name: tenant_id
        type: string
        required: true
    responses:
      200: { description: OK }
      404: { description: Not found }
    """
    return jsonify({"data": out_schema.dump(get_tenant_or_404(tenant_id))})


@bp.get("/tenants/slug/<slug>")
def get_tenant_by_slug(slug: str):
    """
    Get a tenant by slug
    ---
    tags: [Tenants]
    parameters:
      - in: path
        name: slug
        type: string
        required: true
    responses:
      200: { description: OK }
      404: { description: Not found }
    """
    session = storage.get_session()
    tenant = session.query(Tenant).filter(Tenant.slug == slug.strip().lower()).first()
    if not tenant:
        abort(404, description="Tenant not found")
    return jsonify({"data": out_schema.dump(tenant)})


@bp.post("/tenants")
@jwt_required()
def create_tenant():
    """
    Create a tenant
    ---
    tags: [Tenants]
    security:
      - Bearer: []
    consumes: [application/json]
    parameters:
      - in: body
        name: body
        required: true
        schema:
          type: object
          properties:
            name: { type: string, maxLength: 128 }
            slug: { type: string, maxLength: 128 }
    responses:
      201: { description: Created }
      400: { description: Validation error }
      401: { description: Unauthorized }
      409: { description: Slug already exists }
    """
    session = storage.get_session()
    data = create_schema.load(request.get_json(silent=True) or {})
    if slug_taken(session, data["slug"]):
        abort(409, description="Tenant slug already exists")
    tenant = Tenant(name=data["name"], slug=data["slug"])
    storage.new(tenant)
    storage.save()
    return jsonify({"data": out_schema.dump(tenant)}), 201


@bp.put("/tenants/<tenant_id>")
@jwt_required()
def update_tenant(tenant_id: str):
    """
    Update a tenant (name and/or slug)
    ---
    tags: [Tenants]
    security:
      - Bearer: []
    parameters:
      - in: path
        name: tenant_id
        type: string
        required: true
      - in: body
        name: body
        required: true
        schema:
          type: object
          properties:
            name: { type: string, maxLength: 128 }
            slug: { type: string, maxLength: 128 }
    responses:
      200: { description: OK }
      400: { description: Validation error }
      404: { description: Not found }
      409: { description: Slug already taken }
    """
    session = storage.get_session()
    data = update_schema.load(request.get_json(silent=True) or {})
    tenant = get_tenant_or_404(tenant_id)
    if "slug" in data:
        if slug_taken(session, data["slug"], exclude_id=tenant.id):
            abort(409, description="Slug already taken")
        tenant.slug = data["slug"]
    if "name" in data:
        tenant.name = data["name"]
    storage.new(tenant)
    storage.save()
    return jsonify({"data": out_schema.dump(tenant)})


@bp.delete("/tenants/<tenant_id>")
@jwt_required()
def delete_tenant(tenant_id: str):
    """
    Delete a tenant and its plans
    ---
    tags: [Tenants]
    security:
      - Bearer: []
    parameters:
      - in: path
        name: tenant_id
        type: string
        required: true
    responses:
      204: { description: Deleted }
      404: { description: Not found }
    """
    tenant = get_tenant_or_404(tenant_id)
    storage.delete(tenant)
    storage.save()
    return ("", 204)
