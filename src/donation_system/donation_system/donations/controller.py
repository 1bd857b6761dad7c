from __future__ import annotations

import logging
from functools import wraps

from flask import Flask, jsonify, request, session

from ..core.enums import Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..container import Container
from .model import DonationRecord, EventAggregate
from .status import event_completion_label, record_status_label, status_css_class

logger = logging.getLogger(__name__)


def _record_json(r: DonationRecord) -> dict:
    return {
        "id": r.donation_id,
        "user_id": r.user_id,
        "contributor_name": r.contributor_name or "-",
        "type": r.donation_type.value,
        "amount": str(r.amount),
        "event_name": r.event_name,
        "event_date": r.event_date.strftime("%Y-%m-%d"),
        "target_amount": str(r.target_amount),
        "status": r.status.value,
        "status_label": record_status_label(r.status),
        "css_class": status_css_class(r.status),
        "collection_date": r.collection_date.strftime("%Y-%m-%d") if r.collection_date else None,
        "collection_method": r.collection_method.value if r.collection_method else None,
        "wallet_id": r.wallet_id,
        "notes": r.notes or "",
    }


def _event_json(e: EventAggregate, *, with_contributors: bool = False) -> dict:
    out = {
        "id": e.event_id,
        "event_name": e.event_name,
        "event_date": e.event_date.strftime("%Y-%m-%d"),
        "type": e.donation_type.value,
        "total_amount": str(e.total_amount),
        "target_amount": str(e.target_amount),
        "progress": e.progress,
        "status": e.status.value,
        "css_class": status_css_class(e.status),
        "collected_count": e.collected_count,
        "pending_count": e.pending_count,
        "completion": event_completion_label(e),
        "inconsistent_fields": list(e.inconsistent_fields),
    }
    if with_contributors:
        out["contributors"] = [_record_json(r) for r in e.contributors]
    return out


def register(app: Flask, container: Container) -> None:
    def login_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "user_id" not in session:
                return jsonify(message="Please log in to continue"), 401
            return view(*args, **kwargs)

        return wrapper

    def handle_domain_errors(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            try:
                return view(*args, **kwargs)
            except ValidationError as e:
                return jsonify(message=str(e)), 400
            except AuthorizationError as e:
                return jsonify(message=str(e)), 403
            except NotFoundError as e:
                return jsonify(message=str(e)), 404
            except Exception:
                logger.exception("unhandled error in %s", view.__name__)
                return jsonify(message="Internal server error"), 500

        return wrapper

    def _payload() -> dict:
        return request.get_json(silent=True) or request.form.to_dict()

    def _current_role() -> Role:
        return Role(session.get("role", Role.MEMBER.value))

    @app.route("/api/donations", methods=["GET"], endpoint="all_donations")
    @login_required
    @handle_domain_errors
    def all_donations():
        return jsonify([_record_json(r) for r in container.donation_service.list_all_records()])

    @app.route("/api/donations/<int:donation_id>", methods=["GET"], endpoint="donation_detail")
    @login_required
    @handle_domain_errors
    def donation_detail(donation_id: int):
        return jsonify(_record_json(container.donation_service.get_record(donation_id)))

    @app.route("/api/donations/type/<donation_type>", methods=["GET"], endpoint="donations_by_type")
    @login_required
    @handle_domain_errors
    def donations_by_type(donation_type: str):
        records = container.donation_service.list_records(donation_type)
        return jsonify([_record_json(r) for r in records])

    @app.route("/api/donations/type/<donation_type>/events", methods=["GET"], endpoint="donation_events")
    @login_required
    @handle_domain_errors
    def donation_events(donation_type: str):
        events = container.donation_service.list_events(
            donation_type,
            search=request.args.get("search", ""),
            status=request.args.get("status"),
        )
        return jsonify([_event_json(e) for e in events])

    @app.route(
        "/api/donations/type/<donation_type>/events/<path:event_name>",
        methods=["GET"],
        endpoint="donation_event_detail",
    )
    @login_required
    @handle_domain_errors
    def donation_event_detail(donation_type: str, event_name: str):
        event = container.donation_service.get_event(donation_type, event_name)
        if event is None:
            return jsonify(message="Event not found"), 404
        return jsonify(_event_json(event, with_contributors=True))

    @app.route("/api/donations", methods=["POST"], endpoint="create_donation")
    @login_required
    @handle_domain_errors
    def create_donation():
        data = _payload()
        donation_id = container.donation_service.create_record(
            current_user_id=int(session["user_id"]),
            current_role=_current_role(),
            donation_type=data.get("type", ""),
            amount=data.get("amount"),
            event_name=data.get("event_name", ""),
            event_date=data.get("event_date", ""),
            target_amount=data.get("target_amount"),
            status=data.get("status") or "pending",
            collection_date=data.get("collection_date"),
            collection_method=data.get("collection_method"),
            user_id=data.get("user_id"),
            wallet_id=data.get("wallet_id"),
            notes=data.get("notes"),
        )
        return jsonify(id=donation_id), 201

    @app.route("/api/donations/<int:donation_id>/collect", methods=["PUT"], endpoint="collect_donation")
    @login_required
    @handle_domain_errors
    def collect_donation(donation_id: int):
        data = _payload()
        record = container.donation_service.mark_collected(
            current_role=_current_role(),
            donation_id=donation_id,
            collection_date=data.get("collection_date"),
            collection_method=data.get("collection_method"),
            wallet_id=data.get("wallet_id"),
        )
        return jsonify(_record_json(record))

    @app.route("/api/donations/<int:donation_id>", methods=["PUT"], endpoint="update_donation")
    @login_required
    @handle_domain_errors
    def update_donation(donation_id: int):
        record = container.donation_service.update_amount(
            current_user_id=int(session["user_id"]),
            current_role=_current_role(),
            donation_id=donation_id,
            amount=_payload().get("amount"),
        )
        return jsonify(_record_json(record))

    @app.route("/api/donations/<int:donation_id>", methods=["DELETE"], endpoint="delete_donation")
    @login_required
    @handle_domain_errors
    def delete_donation(donation_id: int):
        container.donation_service.delete_record(
            current_user_id=int(session["user_id"]),
            current_role=_current_role(),
            donation_id=donation_id,
        )
        return "", 204
