from __future__ import annotations

from flask import Blueprint, request, jsonify, abort

from auth.decorators import jwt_required
from models import storage
from models.plan import Plan
from models.schemas.plan import PlanCreateSchema, PlanUpdateSchema, PlanOutSchema
from .tenants import get_tenant_or_404

bp = Blueprint("plans", __name__)

create_schema = PlanCreateSchema()
update_schema = PlanUpdateSchema()
out_schema = PlanOutSchema()
out_list_schema = PlanOutSchema(many=True)


def name_taken(session, tenant_id: str, name: str, exclude_id: str | None = None) -> bool:
    q = session.query(Plan).filter(Plan.tenant_id == tenant_id, Plan.name == name)
    if exclude_id:
        q = q.filter(Plan.id != exclude_id)
    return session.query(q.exists()).scalar()


def get_plan_or_404(tenant_id: str, plan_id: str) -> Plan:
    plan = storage.get(Plan, plan_id)
    # a plan under another tenant is reported exactly like a missing one
    if not plan or plan.tenant_id != tenant_id:
        abort(404, description="Plan not found for this tenant")
    return plan


@bp.get("/tenants/<tenant_id>/plans")
def list_plans(tenant_id: str):
    """
    List plans of a tenant, newest first
    ---
    tags: [Plans]
    parameters:
      - in: path
        name: tenant_id
        type: string
        required: true
    responses:
      200: { description: OK }
    """
    session = storage.get_session()
    rows = (
        session.query(Plan)
        .filter(Plan.tenant_id == tenant_id)
        .order_by(Plan.created_at.desc())
        .all()
    )
    return jsonify({"data": out_list_schema.dump(rows)})


@bp.get("/tenants/<tenant_id>/plans/<plan_id>")
def get_plan(tenant_id: str, plan_id: str):
    """
    Get a plan of a tenant
    ---
    tags: [Plans]
    parameters:
      - in: path
        name: tenant_id
        type: string
        required: true
      - in: path
        name: plan_id
        type: string
        required: true
    responses:
      200: { description: OK }
      404: { description: Not found }
    """
    return jsonify({"data": out_schema.dump(get_plan_or_404(tenant_id, plan_id))})


@bp.post("/tenants/<tenant_id>/plans")
@jwt_required()
def create_plan(tenant_id: str):
    """
    Create a plan for a tenant
    ---
    tags: [Plans]
    security:
      - Bearer: []
    consumes: [application/json]
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
            name: { type: string }
            priceCents: { type: integer }
            currency: { type: string, default: INR }
            interval: { type: string, enum: [MONTH, YEAR] }
            active: { type: boolean }
    responses:
      201: { description: Created }
      400: { description: Validation error }
      404: { description: Tenant not found }
      409: { description: Plan name already exists for the tenant }
    """
    session = storage.get_session()
    data = create_schema.load(request.get_json(silent=True) or {})
    tenant = get_tenant_or_404(tenant_id)
    if name_taken(session, tenant.id, data["name"]):
        abort(409, description="A plan with this name already exists for the tenant")
    plan = Plan(tenant_id=tenant.id, **data)
    storage.new(plan)
    storage.save()
    return jsonify({"data": out_schema.dump(plan)}), 201


@bp.put("/tenants/<tenant_id>/plans/<plan_id>")
@jwt_required()
def update_plan(tenant_id: str, plan_id: str):
    """
    Update a plan (partial)
    ---
    tags: [Plans]
    security:
      - Bearer: []
    parameters:
      - in: path
        name: tenant_id
        type: string
        required: true
      - in: path
        name: plan_id
        type: string
        required: true
      - in: body
        name: body
        required: true
        schema:
          type: object
          properties:
            name: { type: string }
            priceCents: { type: integer }
            currency: { type: string }
            interval: { type: string, enum: [MONTH, YEAR] }
            active: { type: boolean }
    responses:
      200: { description: OK }
      404: { description: Not found }
      409: { description: Plan name already exists for the tenant }
    """
    session = storage.get_session()
    plan = get_plan_or_404(tenant_id, plan_id)
    data = update_schema.load(request.get_json(silent=True) or {})
    if "name" in data and name_taken(session, tenant_id, data["name"], exclude_id=plan.id):
        abort(409, description="A plan with this name already exists for the tenant")
    for key, value in data.items():
        setattr(plan, key, value)
    storage.new(plan)
    storage.save()
    return jsonify({"data": out_schema.dump(plan)})


@bp.delete("/tenants/<tenant_id>/plans/<plan_id>")
@jwt_required()
def delete_plan(tenant_id: str, plan_id: str):
    """
    Delete a plan
    ---
    tags: [Plans]
    security:
      - Bearer: []
    parameters:
      - in: path
        name: tenant_id
        type: string
        required: true
      - in: path
        name: plan_id
        type: string
        required: true
    responses:
      204: { description: Deleted }
      404: { description: Not found }
    """
    plan = get_plan_or_404(tenant_id, plan_id)
    storage.delete(plan)
    storage.save()
    return ("", 204)
