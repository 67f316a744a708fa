import logging

from django.core.exceptions import ValidationError

from ..models import Flat, Project
from ..signals import notify_ledger_changed
from .audit_helper import log_action, snapshot
from .store import atomic_write, fetch

logger = logging.getLogger(__name__)

FLAT_FIELDS = ("flat_number", "flat_size", "ownership")


def create_project(*, flats=(), user=None, **fields) -> Project:
    """
    Create a project and its flats in one atomic write.
    ``flats`` holds dicts with flat_number, flat_size and ownership;
    every new flat starts Available.
    """
    with atomic_write():
        project = Project(**fields)
        if not project.total_flats:
            project.total_flats = len(flats)
        project.save()
        for data in flats:
            Flat.objects.create(
                project=project,
                status="Available",
                **{key: data[key] for key in FLAT_FIELDS if key in data},
            )
        log_action(action="create", instance=project, user=user,
                   changes=snapshot(project))
        notify_ledger_changed("projects", "create", project)
    logger.info("project %s created with %d flats", project.pk, len(flats))
    return project


def update_project(project_id, *, flats=None, user=None, **fields) -> Project:
    """
    Update project fields and, when ``flats`` is given, sync its flats:
    dicts with an ``id`` update that flat, dicts without one add an
    Available flat, and existing flats missing from the list are deleted.
    Sold flats cannot be deleted.
    """
    with atomic_write():
        project = fetch(Project, project_id, lock=True)
        for field, value in fields.items():
            setattr(project, field, value)
        project.save()

        if flats is not None:
            existing = {
                flat.pk: flat for flat in
                Flat.objects.select_for_update().filter(project=project)
            }
            keep = set()
            for data in flats:
                flat_id = data.get("id")
                if flat_id is None:
                    Flat.objects.create(
                        project=project,
                        status="Available",
                        **{key: data[key] for key in FLAT_FIELDS if key in data},
                    )
                    continue
                flat = existing.get(flat_id)
                if flat is None:
                    raise ValidationError(
                        f"Flat {flat_id} is not part of project {project.pk}.")
                for key in FLAT_FIELDS:
                    if key in data:
                        setattr(flat, key, data[key])
                flat.save()
                keep.add(flat_id)

            for flat_id, flat in existing.items():
                if flat_id in keep:
                    continue
                if flat.status == "Sold":
                    raise ValidationError(
                        f"Cannot remove flat {flat.flat_number}: it is sold.")
                if flat.inflow_transactions.exists():
                    raise ValidationError(
                        f"Cannot remove flat {flat.flat_number}: it has payments.")
                flat.delete()

        log_action(action="update", instance=project, user=user,
                   changes=snapshot(project))
        notify_ledger_changed("projects", "update", project)
    return project


def delete_project(project_id, *, user=None):
    """Delete a project with its flats and cash logs.
    Projects with sales or expenses are protected."""
    with atomic_write():
        project = fetch(Project, project_id, lock=True)
        if project.sales.exists() or project.expenses.exists():
            raise ValidationError(
                "Cannot delete a project that has sales or expenses.")
        log_action(action="delete", instance=project, user=user,
                   changes={"project_name": project.project_name})
        project.delete()
        notify_ledger_changed("projects", "delete", project)
