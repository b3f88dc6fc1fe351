"""Views for pool access - JSON REST API.

Errors are returned as {"error": "<message>"} with a non-2xx status.
Authentication is the host project's concern; the requester's department
comes from conf.get_requester_department().
"""

import json
import logging
from datetime import datetime, time
from functools import wraps

from django.core.exceptions import PermissionDenied, ValidationError
from django.db.models import Q
from django.http import JsonResponse
from django.utils import timezone
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_http_methods, require_POST

from . import config as pool_config
from . import directory, ledger
from .conf import get_requester_department
from .exceptions import (
    AlreadyExitedError,
    CapacityExceededError,
    DepartmentMismatchError,
    DuplicateAccessError,
    HasActiveAccessError,
    InvalidConfigError,
    InvalidDurationError,
    NotFoundError,
    PoolAccessError,
    PoolInactiveError,
)
from .models import AccessRecord
from .occupancy import pool_stats
from .persons import Owner, PersonType
from .serializers import (
    access_to_dict,
    config_changes_from_wire,
    config_to_dict,
    guest_to_dict,
    stats_to_dict,
)

logger = logging.getLogger(__name__)

ERROR_STATUS = {
    NotFoundError: 404,
    CapacityExceededError: 409,
    DuplicateAccessError: 409,
    AlreadyExitedError: 409,
    HasActiveAccessError: 409,
    PoolInactiveError: 409,
    InvalidConfigError: 400,
    InvalidDurationError: 400,
    DepartmentMismatchError: 400,
}


def error_response(message: str, status: int) -> JsonResponse:
    return JsonResponse({"error": message}, status=status)


def _validation_message(exc: ValidationError) -> str:
    if hasattr(exc, 'message_dict'):
        return "; ".join(
            f"{field}: {' '.join(messages)}" for field, messages in exc.message_dict.items()
        )
    return " ".join(exc.messages)


def pool_api(view_func):
    """Require an authenticated user and translate errors to JSON responses."""

    @wraps(view_func)
    def wrapper(request, *args, **kwargs):
        if not request.user.is_authenticated:
            return error_response("Authentication required", 401)
        try:
            return view_func(request, *args, **kwargs)
        except PoolAccessError as exc:
            return error_response(str(exc), ERROR_STATUS.get(type(exc), 400))
        except ValidationError as exc:
            return error_response(_validation_message(exc), 400)
        except PermissionDenied as exc:
            return error_response(str(exc) or "Permission denied", 403)
        except json.JSONDecodeError:
            return error_response("Request body must be valid JSON", 400)

    return wrapper


def _body(request) -> dict:
    body = json.loads(request.body or b'{}')
    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object")
    return body


def _requester(request) -> tuple[str, bool]:
    return get_requester_department(request), bool(request.user.is_staff)


def _require_department(department: str) -> str:
    if not department:
        raise PermissionDenied("No department associated with this user")
    return department


def _require_staff(request):
    if not request.user.is_staff:
        raise PermissionDenied("Staff access required")


# =============================================================================
# Guests
# =============================================================================


@csrf_exempt
@require_http_methods(["GET", "POST"])
@pool_api
def guests_collection(request):
    """GET: list guests. POST: register a guest for the requester's department."""
    department, is_staff = _requester(request)

    if request.method == "GET":
        if is_staff:
            wanted = request.GET.get("department")
            entries = directory.list_by_department(wanted) if wanted else directory.list_all()
        else:
            entries = directory.list_by_department(_require_department(department))
        return JsonResponse({"guests": [guest_to_dict(e) for e in entries]})

    body = _body(request)
    target = body.get("departmentCode") or department
    if not is_staff and target != _require_department(department):
        raise PermissionDenied("Cannot register guests for another department")

    entry = directory.register_guest(
        first_name=body.get("firstName", ""),
        last_name=body.get("lastName", ""),
        guest_type=body.get("guestType", ""),
        department_code=target,
        registered_by=str(request.user.pk),
        document_number=body.get("documentNumber") or "",
    )
    return JsonResponse(guest_to_dict(entry), status=201)


@csrf_exempt
@require_http_methods(["DELETE"])
@pool_api
def guest_detail(request, entry_id):
    """DELETE: remove a guest who is not in the pool."""
    department, is_staff = _requester(request)
    entry = directory.get_guest(entry_id)
    if not is_staff and entry.department_code != department:
        raise PermissionDenied("Cannot remove guests of another department")

    directory.remove_guest(entry.pk)
    return JsonResponse({"id": str(entry.pk), "removed": True})


# =============================================================================
# Accesses
# =============================================================================


def _person_from_body(request, body, department, is_staff):
    person_type = body.get("personType")

    if person_type == PersonType.OWNER:
        if is_staff and body.get("personId"):
            if not body.get("departmentCode"):
                raise ValidationError("departmentCode is required")
            return Owner(
                id=str(body["personId"]),
                department_code=body.get("departmentCode", ""),
                name=body.get("personName", ""),
            )
        user = request.user
        return Owner(
            id=str(user.pk),
            department_code=_require_department(department),
            name=user.get_full_name() or user.get_username(),
        )

    if person_type == PersonType.GUEST:
        entry = directory.get_guest(body.get("personId"))
        if not is_staff and entry.department_code != department:
            raise PermissionDenied("Cannot register access for another department's guest")
        return entry.as_person()

    raise ValidationError("personType must be 'owner' or 'guest'")


@csrf_exempt
@require_http_methods(["GET", "POST"])
@pool_api
def accesses_collection(request):
    """GET: access history (staff). POST: register an entry."""
    department, is_staff = _requester(request)

    if request.method == "GET":
        _require_staff(request)
        records = ledger.access_history(department_code=request.GET.get("department") or None)
        now = timezone.now()
        return JsonResponse({"accesses": [access_to_dict(r, now=now) for r in records]})

    body = _body(request)
    person = _person_from_body(request, body, department, is_staff)
    record = ledger.register_access(person, person.department_code, body.get("estimatedHours"))
    return JsonResponse(access_to_dict(record), status=201)


@require_GET
@pool_api
def active_accesses(request):
    """GET: everyone currently in the pool, with remaining time."""
    department, is_staff = _requester(request)
    now = timezone.now()
    data = [
        access_to_dict(r, now=now, can_close=ledger.can_close(r, department, is_staff))
        for r in ledger.active_accesses()
    ]
    return JsonResponse({"accesses": data})


@csrf_exempt
@require_POST
@pool_api
def access_exit(request, access_id):
    """POST: mark the exit of an active access."""
    department, is_staff = _requester(request)
    record = ledger.get_access(access_id)
    if not ledger.can_close(record, department, is_staff):
        raise PermissionDenied("Only staff or the same department can mark this exit")

    record = ledger.mark_exit(record.pk)
    return JsonResponse(access_to_dict(record))


# =============================================================================
# Stats & Config
# =============================================================================


@require_GET
@pool_api
def stats(request):
    """GET: occupancy summary."""
    now = timezone.now()
    start_of_day = timezone.make_aware(
        datetime.combine(timezone.localdate(now), time.min)
    )
    records = AccessRecord.objects.filter(
        Q(status=AccessRecord.Status.ACTIVE) | Q(entry_time__gte=start_of_day)
    )
    summary = pool_stats(records, pool_config.get_config(), now)
    return JsonResponse(stats_to_dict(summary))


@csrf_exempt
@require_http_methods(["GET", "PUT"])
@pool_api
def config_detail(request):
    """GET: current configuration. PUT: partial update (staff)."""
    if request.method == "GET":
        return JsonResponse(config_to_dict(pool_config.get_config()))

    _require_staff(request)
    changes = config_changes_from_wire(_body(request))
    config = pool_config.update_config(**changes)
    logger.info("Pool configuration changed by user %s", request.user.pk)
    return JsonResponse(config_to_dict(config))
