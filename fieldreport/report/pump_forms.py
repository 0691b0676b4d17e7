"""Builders for the pump reports: surface pump commissioning and teardown, submersible and Grindex."""

from __future__ import annotations

from typing import Sequence

from fieldreport.config import Settings
from fieldreport.report.elements import (
    Element,
    Field,
    SectionHeader,
    SignatureEntry,
    Table,
    TextBlock,
    grid,
    signatures,
)
from fieldreport.report.form_parts import (
    Record,
    attachments_gallery,
    basic_information,
    letterhead,
    service_signatures,
    two_column_table,
)
from fieldreport.report.formatting import format_boolean, format_date


SURFACE_PUMP_FIELDS = (
    ('Pump Maker', 'pump_maker'),
    ('Pump Type', 'pump_type'),
    ('Impeller Material', 'impeller_material'),
    ('Pump Model', 'pump_model'),
    ('Pump Serial Number', 'pump_serial_number'),
    ('RPM', 'pump_rpm'),
    ('Product Number', 'product_number'),
    ('HMAX (Head)', 'hmax_head'),
    ('QMAX (Flow)', 'qmax_flow'),
    ('Suction Size', 'suction_size'),
    ('Suction Connection', 'suction_connection'),
    ('Suction Strainer P.N', 'suction_strainer_pn'),
    ('Discharge Size', 'discharge_size'),
    ('Discharge Connection', 'discharge_connection'),
    ('Configuration', 'configuration'),
)

MOTOR_FIELDS = (
    ('Maker', 'motor_maker'),
    ('Model', 'motor_model'),
    ('HP', 'motor_hp'),
    ('Phase', 'motor_phase'),
    ('RPM', 'motor_rpm'),
    ('Voltage', 'motor_voltage'),
    ('Frequency', 'motor_frequency'),
    ('Amps', 'motor_amps'),
    ('Max Amb Temperature', 'motor_max_amb_temperature'),
    ('Insulation Class', 'motor_insulation_class'),
    ('No. of Leads', 'motor_no_of_leads'),
)

INSTALLATION_FIELDS = (
    ('Location', 'location'),
    ('Static Head', 'static_head'),
    ('Suction Pipe Size', 'suction_pipe_size'),
    ('Suction Pipe Length', 'suction_pipe_length'),
    ('Suction Pipe Type', 'suction_pipe_type'),
    ('Discharge Pipe Size', 'discharge_pipe_size'),
    ('Discharge Pipe Length', 'discharge_pipe_length'),
    ('Discharge Pipe Type', 'discharge_pipe_type'),
    ('Check Valve Size/Type', 'check_valve_size_type'),
    ('No. of Elbows/Size', 'no_of_elbows_size'),
    ('Media to be Pump', 'media_to_be_pump'),
)

ENGINE_FIELDS = (
    ('Engine Model', 'engine_model'),
    ('Serial Number', 'engine_serial_number'),
    ('Horse Power', 'engine_horse_power'),
    ('Injection Pump Model', 'injection_pump_model'),
    ('Injection Pump Serial No.', 'injection_pump_serial_no'),
    ('Pump Code', 'pump_code'),
    ('Turbo Charger Brand', 'turbo_charger_brand'),
    ('Turbo Charger Model', 'turbo_charger_model'),
    ('Turbo Charger Serial No.', 'turbo_charger_serial_no'),
    ('Type of Fuel', 'type_of_fuel'),
    ('Engine Oil', 'engine_oil'),
    ('Cooling Type', 'cooling_type'),
    ('Fuel Filter P.N.', 'fuel_filter_pn'),
    ('Oil Filter P.N.', 'oil_filter_pn'),
    ('Air Filter P.N.', 'air_filter_pn'),
    ('Charging Alternator P.N.', 'charging_alternator_pn'),
    ('Starting Motor P.N.', 'starting_motor_pn'),
    ('Radiator Fan Belt P.N.', 'radiator_fan_belt_pn'),
    ('Alternator Belt P.N.', 'alternator_belt_pn'),
    ('System Voltage', 'system_voltage'),
)

ENGINE_OPERATION_FIELDS = (
    ('Engine Idle RPM', 'engine_idle_rpm'),
    ('Engine Full RPM', 'engine_full_rpm'),
    ('Oil Pressure @ Idle RPM', 'oil_pressure_idle_rpm'),
    ('Oil Pressure @ Full RPM', 'oil_pressure_full_rpm'),
    ('Oil Temperature', 'oil_temperature'),
    ('Engine Exhaust Temp', 'engine_exhaust_temperature'),
    ('Engine Smoke Quality', 'engine_smoke_quality'),
    ('Engine Vibration', 'engine_vibration'),
    ('Charging Voltage', 'charging_voltage'),
    ('Engine Running Hours', 'engine_running_hours'),
    ('Pump Discharge Pressure', 'pump_discharge_pressure'),
    ('Test Duration', 'test_duration'),
    ('Crankshaft End Play Prior', 'crankshaft_end_play_prior_test'),
    ('Crankshaft End Play Post', 'crankshaft_end_play_post_test'),
)

MOTOR_OPERATION_FIELDS = (
    ('RPM', 'actual_rpm'),
    ('Voltage', 'actual_voltage'),
    ('Amps', 'actual_amps'),
    ('Frequency', 'actual_frequency'),
    ('Motor Temperature', 'motor_temperature'),
    ('Amb Temperature', 'amb_temperature'),
    ('Discharge Pressure', 'discharge_pressure'),
    ('Discharge Flow', 'discharge_flow'),
    ('Test Duration', 'test_duration'),
)

MOTOR_COMPONENTS = (
    ('Fan Cover', 'motor_fan_cover'),
    ('O Ring', 'motor_o_ring'),
    ('End Shield', 'motor_end_shield'),
    ('Rotor Shaft', 'motor_rotor_shaft'),
    ('End Bearing', 'motor_end_bearing'),
    ('Stator Winding', 'motor_stator_winding'),
    ('Eyebolt', 'motor_eyebolt'),
    ('Terminal Box', 'motor_terminal_box'),
    ('Name Plate', 'motor_name_plate'),
    ('Fan', 'motor_fan'),
    ('Frame', 'motor_frame'),
    ('Rotor', 'motor_rotor'),
    ('Front Bearing', 'motor_front_bearing'),
    ('End Shield', 'motor_end_shield_2'),
)

WET_END_COMPONENTS = (
    ('Impeller', 'wet_end_impeller'),
    ('Impeller Vanes', 'wet_end_impeller_vanes'),
    ('Face Seal', 'wet_end_face_seal'),
    ('Shaft', 'wet_end_shaft'),
    ('Bell Housing', 'wet_end_bell_housing'),
    ('Bearings', 'wet_end_bearings'),
    ('Vacuum Unit', 'wet_end_vacuum_unit'),
    ('Oil Reservoir', 'wet_end_oil_reservoir'),
    ('Vacuum Chamber', 'wet_end_vacuum_chamber'),
    ('Wear Ring', 'wet_end_wear_ring'),
)

# Free-form wet end rows numbered after the fixed components.
WET_END_OTHER_SLOTS = range(11, 20)

EVALUATION_HEADERS = ('#', 'COMPONENT', 'EVALUATION')
EVALUATION_COLUMN_WIDTHS = (18.0, 81.0, 81.0)

EXTERNAL_CONDITION = (
    ('Discharge', 'ext_discharge_findings'),
    ('Power Cable', 'ext_power_cable_findings'),
    ('Signal Cable', 'ext_signal_cable_findings'),
    ('Lifting Eye', 'ext_lifting_eye_findings'),
    ('Terminal Cover', 'ext_terminal_cover_findings'),
    ('Outer Casing', 'ext_outer_casing_findings'),
    ('Oil Plug', 'ext_oil_plug_findings'),
    ('Strainer', 'ext_strainer_findings'),
    ('Motor Inspection Plug', 'ext_motor_inspection_plug_findings'),
)

COMPONENTS_CONDITION = (
    ('Discharge Unit', 'comp_discharge_unit_findings'),
    ('Cable Unit', 'comp_cable_unit_findings'),
    ('Top Housing Unit', 'comp_top_housing_unit_findings'),
    ('Starter Unit', 'comp_starter_unit_findings'),
    ('Motor Unit', 'comp_motor_unit_findings'),
    ('Shaft/Rotor Unit', 'comp_shaft_rotor_unit_findings'),
    ('Seal Unit', 'comp_seal_unit_findings'),
    ('Wet End Unit', 'comp_wet_end_unit_findings'),
)

STATOR_WINDING = (
    ('L1 - L2', 'stator_l1_l2'),
    ('L1 - L3', 'stator_l1_l3'),
    ('L2 - L3', 'stator_l2_l3'),
)

INSULATION_RESISTANCE = (
    ('U1 - Ground', 'insulation_u1_ground'),
    ('U2 - Ground', 'insulation_u2_ground'),
    ('V1 - Ground', 'insulation_v1_ground'),
    ('V2 - Ground', 'insulation_v2_ground'),
    ('W1 - Ground', 'insulation_w1_ground'),
    ('W2 - Ground', 'insulation_w2_ground'),
)


def fields_from(record: Record, pairs: Sequence[tuple[str, str]]) -> list[Field]:
    return [Field(label, record.get(key)) for label, key in pairs]


def job_reference(record: Record) -> list[Element]:
    return [
        SectionHeader('Job Reference'),
        grid([Field('Job Order', record.get('job_order')), Field('J.O Date', format_date(record.get('jo_date')))]),
    ]


def evaluation_rows(record: Record, components: Sequence[tuple[str, str]]) -> list[tuple[object, ...]]:
    return [(index, name, record.get(key)) for index, (name, key) in enumerate(components, start=1)]


def wet_end_rows(record: Record) -> list[tuple[object, ...]]:
    """Fixed wet end components, then any numbered "other" rows that carry a name or a value."""
    rows = evaluation_rows(record, WET_END_COMPONENTS)
    for slot in WET_END_OTHER_SLOTS:
        name = record.get(f'wet_end_other_{slot}_name')
        value = record.get(f'wet_end_other_{slot}_value')
        if name or value:
            rows.append((slot, name, value))
    return rows


def evaluation_table(rows: Sequence[tuple[object, ...]]) -> Table:
    return Table(headers=EVALUATION_HEADERS, rows=tuple(rows), column_widths=EVALUATION_COLUMN_WIDTHS)


def findings_table(record: Record, items: Sequence[tuple[str, str]]) -> Table:
    return two_column_table(('ITEM', 'FINDINGS'), [(label, record.get(key)) for label, key in items])


def measurement_table(record: Record, items: Sequence[tuple[str, str]]) -> Table:
    return two_column_table(('MEASUREMENT', 'VALUE'), [(label, record.get(key)) for label, key in items])


# --------------------------------------------------------------------------- #
# Surface pump commissioning
# --------------------------------------------------------------------------- #


def build_engine_surface_pump_commissioning(
    record: Record,
    attachments: Sequence[Record],
    settings: Settings,
) -> list[Element]:
    elements: list[Element] = [letterhead('Commissioning Report', settings, 'Engine Driven Surface Pump')]
    elements += job_reference(record)
    elements += basic_information(record, 'Commissioning Date', 'commissioning_date')
    elements += [
        SectionHeader('Pump Details'),
        grid(fields_from(record, SURFACE_PUMP_FIELDS)),
        SectionHeader('Engine Details'),
        grid(fields_from(record, ENGINE_FIELDS)),
        SectionHeader('Installation Details'),
        grid(fields_from(record, INSTALLATION_FIELDS)),
        SectionHeader('Operational Details'),
        grid(fields_from(record, ENGINE_OPERATION_FIELDS)),
    ]
    elements += attachments_gallery('Installation Photos', attachments, 'file_name')
    elements += service_signatures(record, 'Commissioned By', 'commissioned_by', 'Checked & Approved By')
    return elements


def build_electric_surface_pump_commissioning(
    record: Record,
    attachments: Sequence[Record],
    settings: Settings,
) -> list[Element]:
    elements: list[Element] = [letterhead('Commissioning Report', settings, 'Electric Driven Surface Pump')]
    elements += job_reference(record)
    elements += basic_information(record, 'Commissioning Date', 'commissioning_date')
    elements += [
        SectionHeader('Pump Details'),
        grid(fields_from(record, SURFACE_PUMP_FIELDS)),
        SectionHeader('Electric Motor Details'),
        grid(fields_from(record, MOTOR_FIELDS)),
        SectionHeader('Installation Details'),
        grid(fields_from(record, INSTALLATION_FIELDS)),
        SectionHeader('Operational Details'),
        grid(fields_from(record, MOTOR_OPERATION_FIELDS)),
    ]
    elements += attachments_gallery('Image Attachments', attachments, 'file_name')
    elements += service_signatures(record, 'Service Technician', 'commissioned_by', 'Checked & Approved By')
    return elements


# --------------------------------------------------------------------------- #
# Surface pump teardown
# --------------------------------------------------------------------------- #


def build_electric_surface_pump_teardown(
    record: Record,
    attachments: Sequence[Record],
    settings: Settings,
) -> list[Element]:
    r = record.get
    elements: list[Element] = [letterhead('Teardown Report', settings, 'Electric Driven Surface Pump')]
    elements += job_reference(record)
    elements += basic_information(record)
    elements += [
        SectionHeader('Pump Details'),
        grid(fields_from(record, SURFACE_PUMP_FIELDS)),
        SectionHeader('Electric Motor Details'),
        grid(fields_from(record, MOTOR_FIELDS) + [Field('Connection', r('motor_connection'))]),
        SectionHeader('Service Dates & Location'),
        grid([
            Field('Date In Service/Commissioning', format_date(r('date_in_service_commissioning'))),
            Field('Date Failed', format_date(r('date_failed'))),
            Field('Servicing Date', format_date(r('servicing_date'))),
            Field('Running Hours', r('running_hours')),
            Field('Location', r('location')),
        ]),
        SectionHeader('Warranty Coverage'),
        grid([
            Field('Is the unit within the coverage?', format_boolean(r('is_unit_within_coverage'))),
            Field('Is this a warrantable failure?', format_boolean(r('is_warrantable_failure'))),
        ]),
    ]
    if r('reason_for_teardown'):
        elements += [SectionHeader('Reason for Teardown'), TextBlock('Reason', r('reason_for_teardown'))]
    elements += [
        SectionHeader('Motor Components Evaluation'),
        evaluation_table(evaluation_rows(record, MOTOR_COMPONENTS)),
        SectionHeader('Wet End Components Evaluation'),
        evaluation_table(wet_end_rows(record)),
    ]
    elements += attachments_gallery(
        'Motor Components Teardown Photos', attachments, 'file_name', category='motor_components'
    )
    elements += attachments_gallery('Wet End Teardown Photos', attachments, 'file_name', category='wet_end')
    elements += service_signatures(record, 'Teardowned By', 'teardowned_by', 'Checked & Approved By')
    return elements


# --------------------------------------------------------------------------- #
# Submersible pump reports
# --------------------------------------------------------------------------- #


def build_submersible_pump_service(
    record: Record,
    attachments: Sequence[Record],
    settings: Settings,
) -> list[Element]:
    r = record.get
    elements: list[Element] = [letterhead('Service Report', settings, 'Submersible Pump')]
    elements += job_reference(record)
    elements += basic_information(record, 'Servicing Date', 'servicing_date')
    elements += [
        SectionHeader('Pump Details'),
        grid([
            Field('Pump Model', r('pump_model')),
            Field('Pump Serial Number', r('pump_serial_number')),
            Field('Pump Type', r('pump_type')),
            Field('KW Rating P1', r('kw_rating_p1')),
            Field('KW Rating P2', r('kw_rating_p2')),
            Field('Voltage', r('voltage')),
            Field('Frequency', r('frequency')),
            Field('Max Head', r('max_head')),
            Field('Max Flow', r('max_flow')),
            Field('Max Submerged Depth', r('max_submerged_depth')),
            Field('No. of Leads', r('no_of_leads')),
            Field('Configuration', r('configuration')),
            Field('Discharge Size/Type', r('discharge_size_type')),
        ]),
        SectionHeader('Service Dates'),
        grid([
            Field('Date In Service', format_date(r('date_in_service_commissioning'))),
            Field('Date Failed', format_date(r('date_failed'))),
            Field('Running Hours', r('running_hours')),
            Field('Water Quality', r('water_quality')),
            Field('Water Temperature', r('water_temp')),
        ]),
        SectionHeader('Service Information'),
        TextBlock("Customer's Complaints", r('customers_complaints')),
        TextBlock('Possible Cause', r('possible_cause')),
        SectionHeader('Warranty Coverage'),
        grid([
            Field('Is within coverage period?', format_boolean(r('is_within_coverage_period'))),
            Field('Is this a warrantable failure?', format_boolean(r('is_warrantable_failure'))),
            Field('Summary Details', r('warranty_summary_details'), span=2),
        ]),
        SectionHeader('Service Details'),
        TextBlock('Action Taken', r('action_taken')),
        TextBlock('Observation', r('observation')),
        TextBlock('Findings', r('findings')),
        TextBlock('Recommendation', r('recommendation')),
    ]
    elements += attachments_gallery('Photos', attachments, 'file_name')
    elements += service_signatures(record, 'Service Technician', 'performed_by', 'Approved By')
    return elements


def build_submersible_pump_teardown(
    record: Record,
    attachments: Sequence[Record],
    settings: Settings,
) -> list[Element]:
    r = record.get
    elements: list[Element] = [letterhead('Submersible Pump Teardown Report', settings)]
    elements += job_reference(record)
    elements += basic_information(record)
    elements += [
        SectionHeader('Pump Details'),
        grid([
            Field('Pump Model', r('pump_model')),
            Field('Serial Number', r('serial_number')),
            Field('Part Number', r('part_number')),
            Field('KW Rating P1', r('kw_rating_p1')),
            Field('KW Rating P2', r('kw_rating_p2')),
            Field('Voltage', r('voltage')),
            Field('Phase', r('phase')),
            Field('Frequency', r('frequency')),
            Field('RPM', r('rpm')),
            Field('Hmax (Head)', r('hmax_head')),
            Field('Qmax (Flow)', r('qmax_flow')),
            Field('Tmax', r('tmax')),
            Field('Running Hours', r('running_hrs')),
            Field('Date of Failure', format_date(r('date_of_failure'))),
            Field('Teardown Date', format_date(r('teardown_date'))),
            Field('Reason for Teardown', r('reason_for_teardown'), span=2),
        ]),
        SectionHeader('Warranty Coverage'),
        grid([
            Field('Within Warranty Period?', format_boolean(r('is_within_warranty'))),
            Field('Warrantable Failure?', format_boolean(r('is_warrantable_failure'))),
        ]),
        SectionHeader('External Condition Before Teardown'),
        findings_table(record, EXTERNAL_CONDITION),
        SectionHeader('Components Condition During Teardown'),
        findings_table(record, COMPONENTS_CONDITION),
        TextBlock('Teardown Comments', r('teardown_comments')),
        SectionHeader('Motor Condition', 'Stator Winding Resistance'),
        measurement_table(record, STATOR_WINDING),
        SectionHeader('Motor Condition', 'Insulation Resistance'),
        measurement_table(record, INSULATION_RESISTANCE),
        TextBlock('Motor Comments', r('motor_comments')),
    ]
    elements += attachments_gallery('Pre-Teardown Photos', attachments, 'file_name', category='pre_teardown')
    elements += attachments_gallery('Wet End Photos', attachments, 'file_name', category='wet_end')
    elements += attachments_gallery('Motor Photos', attachments, 'file_name', category='motor')
    elements += service_signatures(record, 'Teardowned By', 'teardowned_by', 'Checked & Approved By')
    return elements


# --------------------------------------------------------------------------- #
# Grindex service form
# --------------------------------------------------------------------------- #


def build_grindex_service(record: Record, attachments: Sequence[Record], settings: Settings) -> list[Element]:
    r = record.get
    elements: list[Element] = [
        letterhead('Grindex Service Form', settings),
        SectionHeader('Job Reference'),
        grid([Field('Job Order No.', r('job_order')), Field('Date', format_date(r('report_date')))]),
        SectionHeader('General Information'),
        grid([
            Field('Reporting Person', r('reporting_person_name')),
            Field('Customer Name', r('customer_name'), span=2),
            Field('Contact Person', r('contact_person')),
            Field('Address', r('address'), span=2),
            Field('Email Address', r('email_address')),
            Field('Phone Number', r('phone_number')),
        ]),
        SectionHeader('Pump Details'),
        grid([
            Field('Pump Model', r('pump_model')),
            Field('Pump Serial No.', r('pump_serial_no')),
            Field('Engine Model', r('engine_model')),
            Field('Engine Serial No.', r('engine_serial_no')),
            Field('KW', r('kw')),
            Field('RPM', r('rpm')),
            Field('Product Number', r('product_number')),
            Field('Hmax', r('hmax')),
            Field('Qmax', r('qmax')),
            Field('Running Hours', r('running_hours')),
        ]),
        SectionHeader('Operational Data'),
        grid([
            Field('Servicing Date', format_date(r('date_in_service'))),
            Field('Date Failed', format_date(r('date_failed'))),
            Field('Date Commissioned', format_date(r('date_commissioned'))),
        ]),
        SectionHeader('Customer Complaint'),
        TextBlock('Customer Complaint', r('customer_complaint')),
        SectionHeader('Possible Cause'),
        TextBlock('Possible Cause', r('possible_cause')),
        SectionHeader('Service Report Details'),
        TextBlock('Summary Details', r('summary_details')),
        TextBlock('Action Taken', r('action_taken')),
        TextBlock('Observation', r('observation')),
        TextBlock('Findings', r('findings')),
        TextBlock('Recommendations', r('recommendations')),
    ]
    elements += attachments_gallery('Image Attachments', attachments, 'file_title')
    elements += [
        SectionHeader('Signatures'),
        signatures([
            SignatureEntry('Service Technician', None, r('service_technician'), r('service_technician_signature')),
            SignatureEntry('Noted By', None, r('noted_by'), r('noted_by_signature')),
            SignatureEntry('Approved By', None, r('approved_by'), r('approved_by_signature')),
            SignatureEntry('Acknowledged By', None, r('acknowledged_by'), r('acknowledged_by_signature')),
        ]),
    ]
    return elements
