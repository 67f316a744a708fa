from .expenses import create_expense, delete_expense, update_expense
from .exports import REPORTS, rows_to_csv
from .inflows import (delete_inflow_payment, edit_inflow_payment,
                      record_inflow_payment)
from .payments import delete_payment, edit_payment, make_payment, record_outflow
from .projects import create_project, delete_project, update_project
from .reference import (add_expense_item, add_operating_cost_item,
                        delete_operating_cost, record_operating_cost,
                        update_operating_cost)
from .reporting import (customer_summaries, dashboard_stats, project_summaries,
                        project_summary, vendor_summary)
from .sales import create_sale, delete_sale, edit_sale
