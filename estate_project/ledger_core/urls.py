from django.urls import path

from . import views

app_name = "ledger_core"

urlpatterns = [
    path("sales/", views.create_sale_view, name="create-sale"),
    path("sales/<int:sale_id>/edit/", views.edit_sale_view, name="edit-sale"),
    path("sales/<int:sale_id>/delete/", views.delete_sale_view,
         name="delete-sale"),
    path("expenses/<int:expense_id>/payments/", views.make_payment_view,
         name="make-payment"),
    path("payments/<int:outflow_id>/edit/", views.edit_payment_view,
         name="edit-payment"),
    path("payments/<int:outflow_id>/delete/", views.delete_payment_view,
         name="delete-payment"),
    path("inflows/", views.record_inflow_view, name="record-inflow"),
    path("dashboard/", views.dashboard_view, name="dashboard"),
    path("reports/<slug:report>.csv", views.export_report_view,
         name="export-report"),
]
