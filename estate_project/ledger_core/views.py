import json
import logging
from functools import wraps

from django.core.exceptions import ValidationError
from django.http import Http404, HttpResponse, JsonResponse
from django.utils.dateparse import parse_date
from django.views.decorators.http import require_GET, require_POST

from .exceptions import InvalidAmount, NotFound, StoreFailure
from .services import (REPORTS, create_sale, dashboard_stats, delete_payment,
                       delete_sale, edit_payment, edit_sale, make_payment,
                       record_inflow_payment, rows_to_csv)
from .services.inflows import INFLOW_FIELDS
from .services.sales import SALE_FIELDS
from .services.validation import is_money

logger = logging.getLogger(__name__)

# Money keys of a sale payload, checked before the service sees them
SALE_MONEY_FIELDS = (
    "base_price", "per_sft_price", "parking_charge", "utility_charge",
    "downpayment", "monthly_installment",
)


def ledger_errors(view):
    """Turn service exceptions into JSON error responses."""
    @wraps(view)
    def wrapper(request, *args, **kwargs):
        try:
            return view(request, *args, **kwargs)
        except NotFound as e:
            return JsonResponse({"ok": False, "error": "NotFound",
                                 "detail": str(e)}, status=404)
        except ValidationError as e:
            return JsonResponse({"ok": False, "error": e.__class__.__name__,
                                 "detail": e.messages}, status=400)
        except StoreFailure as e:
            logger.error("store failure in %s: %s", view.__name__, e)
            return JsonResponse({"ok": False, "error": "StoreFailure",
                                 "detail": str(e)}, status=503)
    return wrapper


def _payload(request):
    try:
        data = json.loads(request.body or b"{}")
    except ValueError:
        raise ValidationError("Request body must be JSON.")
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object.")
    return data


def _pick(data, allowed):
    unknown = set(data) - allowed
    if unknown:
        raise ValidationError(f"Unknown fields: {sorted(unknown)}")
    return data


def _date(data, key, required=True):
    value = data.get(key)
    parsed = parse_date(value) if isinstance(value, str) else None
    if parsed is None and (required or value):
        raise ValidationError(f"{key} must be a YYYY-MM-DD date.")
    return parsed


def _amount(data, key, required=True):
    """A money field from the JSON body: whole units, no strings, floats or bools."""
    value = data.get(key)
    if value is None and not required:
        return None
    if not is_money(value):
        raise InvalidAmount(f"{key} must be a whole number.")
    return value


def _money_fields(data):
    for key in SALE_MONEY_FIELDS:
        if key in data:
            data[key] = _amount(data, key, required=False)
    return data


def _user(request):
    user = getattr(request, "user", None)
    return user if user is not None and user.is_authenticated else None


# ----------------------------
# Sales
# ----------------------------
@require_POST
@ledger_errors
def create_sale_view(request):
    data = _money_fields(
        _pick(_payload(request), SALE_FIELDS | {"payment_method"}))
    data["base_price"] = _amount(data, "base_price")
    data["sale_date"] = _date(data, "sale_date")
    sale = create_sale(user=_user(request), **data)
    return JsonResponse({"ok": True, "sale_id": sale.pk,
                         "total_price": sale.total_price}, status=201)


@require_POST
@ledger_errors
def edit_sale_view(request, sale_id):
    data = _money_fields(_pick(_payload(request), SALE_FIELDS))
    if "sale_date" in data:
        data["sale_date"] = _date(data, "sale_date")
    sale = edit_sale(sale_id, user=_user(request), **data)
    return JsonResponse({"ok": True, "sale_id": sale.pk, "flat_id": sale.flat_id,
                         "total_price": sale.total_price})


@require_POST
@ledger_errors
def delete_sale_view(request, sale_id):
    delete_sale(sale_id, user=_user(request))
    return JsonResponse({"ok": True})


# ----------------------------
# Expense payments
# ----------------------------
@require_POST
@ledger_errors
def make_payment_view(request, expense_id):
    data = _payload(request)
    expense, outflow = make_payment(
        expense_id,
        amount_to_pay=_amount(data, "amount_to_pay"),
        payment_date=_date(data, "payment_date"),
        payment_method=data.get("payment_method", "Cash"),
        reference=data.get("reference", ""),
        user=_user(request),
    )
    return JsonResponse({"ok": True, "outflow_id": outflow.pk,
                         "paid_amount": expense.paid_amount,
                         "status": expense.status}, status=201)


@require_POST
@ledger_errors
def edit_payment_view(request, outflow_id):
    data = _payload(request)
    outflow = edit_payment(
        outflow_id,
        amount=_amount(data, "amount"),
        date=_date(data, "date"),
        payment_method=data.get("payment_method"),
        reference=data.get("reference"),
        description=data.get("description"),
        user=_user(request),
    )
    return JsonResponse({"ok": True, "outflow_id": outflow.pk,
                         "amount": outflow.amount})


@require_POST
@ledger_errors
def delete_payment_view(request, outflow_id):
    expense = delete_payment(outflow_id, user=_user(request))
    body = {"ok": True}
    if expense is not None:
        body.update(paid_amount=expense.paid_amount, status=expense.status)
    return JsonResponse(body)


# ----------------------------
# Customer payments
# ----------------------------
@require_POST
@ledger_errors
def record_inflow_view(request):
    data = _pick(_payload(request),
                 INFLOW_FIELDS | {"project_id", "flat_id", "customer_id"})
    data["amount"] = _amount(data, "amount")
    data["date"] = _date(data, "date")
    inflow = record_inflow_payment(user=_user(request), **data)
    return JsonResponse({"ok": True, "inflow_id": inflow.pk,
                         "receipt_number": inflow.receipt_number}, status=201)


# ----------------------------
# Reporting
# ----------------------------
@require_GET
@ledger_errors
def dashboard_view(request):
    stats = dashboard_stats(
        start=_date(request.GET, "start", required=False),
        end=_date(request.GET, "end", required=False),
    )
    return JsonResponse(stats)


@require_GET
@ledger_errors
def export_report_view(request, report):
    if report not in REPORTS:
        raise Http404(f"Unknown report {report}")
    build_rows, columns = REPORTS[report]
    text = rows_to_csv(build_rows(), columns)
    response = HttpResponse(text, content_type="text/csv")
    response["Content-Disposition"] = f'attachment; filename="{report}.csv"'
    return response
