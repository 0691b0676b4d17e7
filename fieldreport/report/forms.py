"""Declarative report definitions, one per form type, keyed by URL slug."""

from __future__ import annotations

import re
from dataclasses import dataclass

from fieldreport.errors import UnknownFormError
from fieldreport.report.engine_forms import (
    MEASURING_SELECT,
    TEARDOWN_SELECT,
    build_components_teardown_measuring,
    build_daily_time_sheet,
    build_deutz_commissioning,
    build_deutz_service,
    build_engine_inspection_receiving,
    build_engine_teardown,
    build_job_order_request,
)
from fieldreport.report.form_parts import Builder, Record
from fieldreport.report.pump_forms import (
    build_electric_surface_pump_commissioning,
    build_electric_surface_pump_teardown,
    build_engine_surface_pump_commissioning,
    build_grindex_service,
    build_submersible_pump_service,
    build_submersible_pump_teardown,
)
from fieldreport.types import FormSummary


@dataclass(frozen=True)
class FormDefinition:
    slug: str
    title: str
    table: str
    filename_prefix: str
    filename_field: str
    build: Builder
    select: str = '*'
    attachments_table: str | None = None
    attachments_fk: str | None = None
    # Rows with ``deleted_at`` set are treated as missing.
    soft_delete: bool = False

    def filename(self, record: Record, record_id: str) -> str:
        key = str(record.get(self.filename_field) or '').strip() or str(record_id)
        key = re.sub(r'[^A-Za-z0-9._-]+', '_', key).strip('_') or str(record_id)
        return f'{self.filename_prefix}-{key}.pdf'

    def summary(self) -> FormSummary:
        return FormSummary(
            slug=self.slug,
            title=self.title,
            table=self.table,
            attachments_table=self.attachments_table,
        )



FORMS: dict[str, FormDefinition] = {
    form.slug: form
    for form in (
        FormDefinition(
            slug='deutz-commissioning',
            title='Deutz Commissioning Report',
            table='deutz_commissioning_report',
            filename_prefix='Commissioning-Report',
            filename_field='job_order_no',
            build=build_deutz_commissioning,
            attachments_table='deutz_commission_attachments',
            attachments_fk='form_id',
        ),
        FormDefinition(
            slug='deutz-service',
            title='Deutz Service Report',
            table='deutz_service_report',
            filename_prefix='Service-Report',
            filename_field='job_order',
            build=build_deutz_service,
        ),
        FormDefinition(
            slug='job-order-request',
            title='Job Order Request Form',
            table='job_order_request_form',
            filename_prefix='Job-Order-Request',
            filename_field='shop_field_jo_number',
            build=build_job_order_request,
            attachments_table='job_order_attachments',
            attachments_fk='job_order_id',
        ),
        FormDefinition(
            slug='engine-teardown',
            title='Engine Teardown Report',
            table='engine_teardown_reports',
            filename_prefix='engine-teardown',
            filename_field='job_number',
            build=build_engine_teardown,
            select=TEARDOWN_SELECT,
        ),
        FormDefinition(
            slug='daily-time-sheet',
            title='Daily Time Sheet',
            table='daily_time_sheet',
            filename_prefix='Daily-Time-Sheet',
            filename_field='job_number',
            build=build_daily_time_sheet,
            select='*, daily_time_sheet_entries(*)',
            attachments_table='daily_time_sheet_attachments',
            attachments_fk='daily_time_sheet_id',
        ),
        FormDefinition(
            slug='engine-inspection-receiving',
            title='Engine Inspection / Receiving Report',
            table='engine_inspection_receiving_report',
            filename_prefix='engine-inspection-receiving',
            filename_field='jo_number',
            build=build_engine_inspection_receiving,
            select='*, engine_inspection_items(*)',
        ),
        FormDefinition(
            slug='components-teardown-measuring',
            title='Components Teardown Measuring Report',
            table='components_teardown_measuring_report',
            filename_prefix='components-teardown-measuring',
            filename_field='job_order_no',
            build=build_components_teardown_measuring,
            select=MEASURING_SELECT,
            soft_delete=True,
        ),
        FormDefinition(
            slug='engine-surface-pump-commissioning',
            title='Engine Driven Surface Pump Commissioning Report',
            table='engine_surface_pump_commissioning_report',
            filename_prefix='Engine-Surface-Pump-Commissioning-Report',
            filename_field='job_order',
            build=build_engine_surface_pump_commissioning,
            attachments_table='engine_surface_pump_commissioning_attachments',
            attachments_fk='report_id',
        ),
        FormDefinition(
            slug='electric-surface-pump-commissioning',
            title='Electric Driven Surface Pump Commissioning Report',
            table='electric_surface_pump_commissioning_report',
            filename_prefix='Electric-Surface-Pump-Commissioning-Report',
            filename_field='job_order',
            build=build_electric_surface_pump_commissioning,
            attachments_table='electric_surface_pump_commissioning_attachments',
            attachments_fk='report_id',
        ),
        FormDefinition(
            slug='electric-surface-pump-teardown',
            title='Electric Driven Surface Pump Teardown Report',
            table='electric_surface_pump_teardown_report',
            filename_prefix='Electric-Surface-Pump-Teardown-Report',
            filename_field='job_order',
            build=build_electric_surface_pump_teardown,
            attachments_table='electric_surface_pump_teardown_attachments',
            attachments_fk='report_id',
        ),
        FormDefinition(
            slug='submersible-pump-service',
            title='Submersible Pump Service Report',
            table='submersible_pump_service_report',
            filename_prefix='Submersible-Pump-Service-Report',
            filename_field='job_order',
            build=build_submersible_pump_service,
            attachments_table='submersible_pump_service_attachments',
            attachments_fk='report_id',
        ),
        FormDefinition(
            slug='submersible-pump-teardown',
            title='Submersible Pump Teardown Report',
            table='submersible_pump_teardown_report',
            filename_prefix='Submersible-Pump-Teardown-Report',
            filename_field='job_order',
            build=build_submersible_pump_teardown,
            attachments_table='submersible_pump_teardown_attachments',
            attachments_fk='report_id',
        ),
        FormDefinition(
            slug='grindex-service',
            title='Grindex Service Form',
            table='grindex_service_forms',
            filename_prefix='Grindex-Service-Form',
            filename_field='job_order',
            build=build_grindex_service,
            attachments_table='grindex_service_attachments',
            attachments_fk='form_id',
        ),
    )
}


def get_form(slug: str) -> FormDefinition:
    form = FORMS.get(str(slug or '').strip().lower())
    if form is None:
        raise UnknownFormError('Unknown form type', str(slug))
    return form


def list_forms() -> list[FormSummary]:
    return [form.summary() for form in FORMS.values()]
