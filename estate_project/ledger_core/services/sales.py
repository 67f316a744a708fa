import datetime
import logging

from django.core.exceptions import ValidationError
from django.core.validators import URLValidator

from ..exceptions import FlatNotAvailable
from ..models import Customer, Flat, InflowTransaction, Project, Sale, SaleExtraCost
from ..signals import notify_ledger_changed
from .audit_helper import log_action, snapshot
from .counters import next_receipt_number
from .store import atomic_write, fetch
from .validation import require_money

logger = logging.getLogger(__name__)

# Fields edit_sale() accepts
SALE_FIELDS = {
    "project_id", "flat_id", "customer_id", "base_price", "per_sft_price",
    "parking_charge", "utility_charge", "extra_costs", "downpayment",
    "monthly_installment", "sale_date", "note", "deed_link",
}


# ----------------------------
# Input validation
# ----------------------------
def _clean_extra_costs(extra_costs):
    cleaned = []
    for cost in extra_costs or []:
        if not isinstance(cost, dict):
            raise ValidationError("Extra costs must be purpose/amount objects.")
        purpose = str(cost.get("purpose") or "").strip()
        if not purpose:
            raise ValidationError("Every extra cost needs a purpose.")
        amount = require_money(cost.get("amount"), "Extra cost amount")
        cleaned.append({"purpose": purpose, "amount": amount})
    return cleaned


def _validate_sale_input(data):
    if not require_money(data.get("base_price"), "base_price"):
        raise ValidationError("Base price must be greater than 0.")
    for field in ("parking_charge", "utility_charge", "downpayment",
                  "monthly_installment", "per_sft_price"):
        data[field] = require_money(data.get(field), field)
    if not data.get("sale_date"):
        raise ValidationError("Sale date is required.")
    if data.get("deed_link"):
        URLValidator()(data["deed_link"])
    data["extra_costs"] = _clean_extra_costs(data.get("extra_costs"))
    return data


def _write_extra_costs(sale, extra_costs):
    SaleExtraCost.objects.bulk_create([
        SaleExtraCost(sale=sale, purpose=cost["purpose"],
                      amount=cost["amount"], position=position)
        for position, cost in enumerate(extra_costs)
    ])


# ----------------------------
# Sale lifecycle
# ----------------------------
def create_sale(*, project_id: int, flat_id: int, customer_id: int,
                base_price: int, sale_date: datetime.date,
                parking_charge: int = 0, utility_charge: int = 0,
                extra_costs: list[dict] | None = None, downpayment: int = 0,
                monthly_installment: int = 0, per_sft_price: int = 0,
                note: str = "", deed_link: str = "", payment_method: str = "Cash",
                user=None) -> Sale:
    """
    Record a flat sale.

    In one atomic write: insert the Sale with its computed total price,
    mark the flat Sold and, when there is a downpayment, add a Booking
    inflow for it dated on the sale date. The flat must be Available;
    it is locked while this is checked so two sales of the same flat
    cannot both succeed.
    """
    data = _validate_sale_input({
        "base_price": base_price, "parking_charge": parking_charge,
        "utility_charge": utility_charge, "extra_costs": extra_costs,
        "downpayment": downpayment, "monthly_installment": monthly_installment,
        "per_sft_price": per_sft_price, "sale_date": sale_date,
        "deed_link": deed_link,
    })
    total_price = Sale.compute_total(
        base_price, parking_charge, utility_charge, data["extra_costs"])

    with atomic_write():
        project = fetch(Project, project_id)
        customer = fetch(Customer, customer_id)
        flat = fetch(Flat, flat_id, lock=True, project=project)

        if flat.status != "Available":
            logger.warning("sale rejected: flat %s is %s", flat.pk, flat.status)
            raise FlatNotAvailable(
                f"Flat {flat.flat_number} is {flat.status}, not Available.")

        sale = Sale(
            project=project,
            flat=flat,
            customer=customer,
            base_price=base_price,
            per_sft_price=per_sft_price or 0,
            parking_charge=parking_charge or 0,
            utility_charge=utility_charge or 0,
            total_price=total_price,
            downpayment=downpayment or 0,
            monthly_installment=monthly_installment or 0,
            sale_date=sale_date,
            note=note or "",
            deed_link=deed_link or "",
        )
        sale.save()
        _write_extra_costs(sale, data["extra_costs"])

        flat.status = "Sold"
        flat.save(update_fields=["status"])

        booking = None
        if downpayment and downpayment > 0:
            booking = InflowTransaction.objects.create(
                project=project,
                flat=flat,
                customer=customer,
                payment_type="Booking",
                payment_purpose="Booking Money",
                date=sale_date,
                amount=downpayment,
                payment_method=payment_method,
                receipt_number=next_receipt_number(),
            )

        log_action(action="create", instance=sale, user=user,
                   changes=snapshot(sale))
        notify_ledger_changed("sales", "create", sale)
        notify_ledger_changed("flats", "update", flat)
        if booking is not None:
            notify_ledger_changed("inflowTransactions", "create", booking)

    logger.info("sale %s recorded: flat %s, total %s", sale.pk, flat.pk,
                total_price)
    return sale


def edit_sale(sale_id: int, *, user=None, **changes) -> Sale:
    """
    Update a sale and recompute its total price.

    Moving the sale to another flat frees the old flat and marks
    the new one Sold in the same atomic write; the new flat must be
    Available. Inflow payments already recorded are left untouched,
    including their flat.
    """
    unknown = set(changes) - SALE_FIELDS
    if unknown:
        raise ValidationError(f"Unknown sale fields: {sorted(unknown)}")

    with atomic_write():
        sale = fetch(Sale, sale_id, lock=True)

        data = {field: getattr(sale, field) for field in SALE_FIELDS
                if field != "extra_costs"}
        data["extra_costs"] = [
            {"purpose": cost.purpose, "amount": cost.amount}
            for cost in sale.extra_costs.all()
        ]
        data.update(changes)
        data = _validate_sale_input(data)

        project = fetch(Project, data["project_id"])
        customer = fetch(Customer, data["customer_id"])
        old_flat_id = sale.flat_id
        new_flat_id = data["flat_id"]

        flat_changed = new_flat_id != old_flat_id
        if flat_changed:
            # Lock both flats in a fixed order
            locked = {
                flat.pk: flat for flat in
                Flat.objects.select_for_update()
                .filter(pk__in=[old_flat_id, new_flat_id]).order_by("pk")
            }
            new_flat = locked.get(new_flat_id)
            if new_flat is None or new_flat.project_id != project.pk:
                raise ValidationError(
                    f"Flat {new_flat_id} does not exist in project {project.pk}.")
            if new_flat.status != "Available":
                logger.warning("sale %s move rejected: flat %s is %s",
                               sale.pk, new_flat.pk, new_flat.status)
                raise FlatNotAvailable(
                    f"Flat {new_flat.flat_number} is {new_flat.status}, "
                    "not Available.")
            old_flat = locked[old_flat_id]
            old_flat.status = "Available"
            old_flat.save(update_fields=["status"])
            new_flat.status = "Sold"
            new_flat.save(update_fields=["status"])

        sale.project = project
        sale.customer = customer
        if flat_changed:
            sale.flat = new_flat
        for field in ("base_price", "per_sft_price", "parking_charge",
                      "utility_charge", "downpayment", "monthly_installment"):
            setattr(sale, field, data[field] or 0)
        sale.sale_date = data["sale_date"]
        sale.note = data["note"] or ""
        sale.deed_link = data["deed_link"] or ""
        sale.total_price = Sale.compute_total(
            data["base_price"], data["parking_charge"],
            data["utility_charge"], data["extra_costs"])
        sale.save()

        if "extra_costs" in changes:
            sale.extra_costs.all().delete()
            _write_extra_costs(sale, data["extra_costs"])

        log_action(action="update", instance=sale, user=user,
                   changes=snapshot(sale))
        notify_ledger_changed("sales", "update", sale)
        if flat_changed:
            notify_ledger_changed("flats", "update", old_flat)
            notify_ledger_changed("flats", "update", new_flat)

    logger.info("sale %s updated: flat %s, total %s", sale.pk, sale.flat_id,
                sale.total_price)
    return sale


def delete_sale(sale_id: int, *, user=None) -> None:
    """Delete a sale and return its flat to Available in one atomic write.
    Inflow payments recorded for the flat are kept."""
    with atomic_write():
        sale = fetch(Sale, sale_id, lock=True)
        flat = fetch(Flat, sale.flat_id, lock=True)
        sale_pk = sale.pk

        log_action(action="delete", instance=sale, user=user,
                   changes=snapshot(sale))
        sale.delete()

        flat.status = "Available"
        flat.save(update_fields=["status"])

        notify_ledger_changed("sales", "delete", sale)
        notify_ledger_changed("flats", "update", flat)

    logger.info("sale %s deleted, flat %s available again", sale_pk, flat.pk)
