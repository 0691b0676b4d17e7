"""Builders for the engine-side reports: Deutz forms, job orders, teardown, inspection and time sheets."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence

from fieldreport.config import Settings
from fieldreport.report.elements import (
    CheckboxItem,
    Element,
    Field,
    SectionHeader,
    SignatureEntry,
    Table,
    TextBlock,
    checkboxes,
    grid,
    signatures,
)
from fieldreport.report.form_parts import (
    Record,
    attachments_gallery,
    bank_row,
    first_row,
    humanize,
    letterhead,
    mapping_rows,
)
from fieldreport.report.formatting import (
    format_boolean,
    format_currency,
    format_date,
    format_hours,
    format_status,
    format_time,
)

# --------------------------------------------------------------------------- #
# Deutz commissioning report
# --------------------------------------------------------------------------- #


def build_deutz_commissioning(record: Record, attachments: Sequence[Record], settings: Settings) -> list[Element]:
    r = record.get
    elements: list[Element] = [
        letterhead('Deutz Commissioning Report', settings),
        SectionHeader('Job Reference'),
        grid([
            Field('Job Order No.', r('job_order_no')),
            Field('Commissioning Date', format_date(r('commissioning_date'))),
        ]),
        SectionHeader('General Information'),
        grid([
            Field('Reporting Person', r('reporting_person_name')),
            Field('Commissioning No.', r('commissioning_no')),
            Field('Equipment Name', r('equipment_name')),
            Field('Customer Name', r('customer_name'), span=2),
            Field('Contact Person', r('contact_person')),
            Field('Address', r('address'), span=2),
            Field('Commissioning Location', r('commissioning_location'), span=2),
            Field('Email Address', r('email_address')),
            Field('Phone Number', r('phone_number')),
        ]),
        SectionHeader('Equipment & Engine Data'),
        grid([
            Field('Equipment Manufacturer', r('equipment_manufacturer')),
            Field('Equipment Type', r('equipment_type')),
            Field('Equipment No.', r('equipment_no')),
            Field('Engine Model', r('engine_model')),
            Field('Engine Serial No.', r('engine_serial_no')),
            Field('Output (kW/HP)', r('output')),
            Field('Revolutions (RPM)', r('revolutions')),
            Field('Main Effective Pressure', r('main_effective_pressure')),
            Field('Running Hours', r('running_hours')),
        ]),
        SectionHeader('Technical Specifications'),
        grid([
            Field('Lube Oil Type', r('lube_oil_type')),
            Field('Fuel Type', r('fuel_type')),
            Field('Cooling Water Additives', r('cooling_water_additives'), span=2),
            Field('Fuel Pump Code', r('fuel_pump_code')),
            Field('Fuel Pump Serial No.', r('fuel_pump_serial_no')),
            Field('Turbo Model', r('turbo_model')),
            Field('Turbo Serial No.', r('turbo_serial_no')),
        ]),
        SectionHeader('Inspection Prior Test'),
        TextBlock('Summary', r('summary')),
        grid([
            Field('1. Check Oil Level', r('check_oil_level')),
            Field('2. Check Air Filter Element', r('check_air_filter')),
            Field('3. Check Hoses and Clamps', r('check_hoses_clamps')),
            Field('4. Check Engine Support', r('check_engine_support')),
            Field('5. Check V-Belt', r('check_v_belt')),
            Field('6. Check Water Level', r('check_water_level')),
            Field('7. Crankshaft End Play', r('crankshaft_end_play')),
            Field('Inspector', r('inspector')),
        ]),
        TextBlock('Comments / Action', r('comments_action')),
        SectionHeader('Operational Readings (Test Run)'),
        grid([
            Field('RPM (Idle Speed)', r('rpm_idle_speed')),
            Field('RPM (Full Speed)', r('rpm_full_speed')),
            Field('Oil Press. (Idle)', r('oil_pressure_idle')),
            Field('Oil Press. (Full)', r('oil_pressure_full')),
            Field('Oil Temperature', r('oil_temperature')),
            Field('Engine Smoke', r('engine_smoke')),
            Field('Engine Vibration', r('engine_vibration')),
            Field('Engine Leakage', r('check_engine_leakage')),
        ]),
        SectionHeader('Cylinder'),
        grid(
            [Field('Cyl. Head Temp', r('cylinder_head_temp')), Field('Cylinder No.', r('cylinder_no'))]
            + [Field(f'{bank}{number}', r(f'cylinder_{bank.lower()}{number}')) for bank in 'AB' for number in range(1, 7)]
        ),
        SectionHeader('Parts Reference & Controller'),
        grid([
            Field('Starter Part No.', r('starter_part_no')),
            Field('Alternator Part No.', r('alternator_part_no')),
            Field('V-Belt Part No.', r('v_belt_part_no')),
            Field('Air Filter Part No.', r('air_filter_part_no')),
            Field('Oil Filter Part No.', r('oil_filter_part_no')),
            Field('Fuel Filter Part No.', r('fuel_filter_part_no')),
            Field('Pre-Fuel Filter Part No.', r('pre_fuel_filter_part_no')),
            Field('Controller Brand', r('controller_brand')),
            Field('Controller Model', r('controller_model')),
        ]),
        SectionHeader('Remarks & Recommendations'),
        TextBlock('Remarks', r('remarks')),
        TextBlock('Recommendation', r('recommendation')),
    ]
    elements += attachments_gallery('Image Attachments', attachments, 'file_title')
    elements += [
        SectionHeader('Signatures'),
        signatures([
            SignatureEntry('Attending Technician', None, r('attending_technician'), r('attending_technician_signature')),
            SignatureEntry('Noted By', None, r('noted_by'), r('noted_by_signature')),
            SignatureEntry('Approved By', None, r('approved_by'), r('approved_by_signature')),
            SignatureEntry('Acknowledged By', None, r('acknowledged_by'), r('acknowledged_by_signature')),
        ]),
    ]
    return elements


# --------------------------------------------------------------------------- #
# Deutz service report
# --------------------------------------------------------------------------- #


def build_deutz_service(record: Record, attachments: Sequence[Record], settings: Settings) -> list[Element]:
    r = record.get
    return [
        letterhead('Deutz Service Report', settings),
        SectionHeader('General Information'),
        grid([
            Field('Job Order', r('job_order')),
            Field('Report Date', format_date(r('report_date'))),
            Field('Reporting Person', r('reporting_person_name')),
            Field('Equipment Manufacturer', r('equipment_manufacturer')),
            Field('Customer Name', r('customer_name'), span=2),
            Field('Contact Person', r('contact_person')),
            Field('Telephone / Fax', r('telephone_fax')),
            Field('Address', r('address'), span=2),
            Field('Email Address', r('email_address')),
        ]),
        SectionHeader('Equipment Information'),
        grid([
            Field('Engine Model', r('engine_model')),
            Field('Engine Serial No.', r('engine_serial_no')),
            Field('Equipment Model', r('equipment_model')),
            Field('Equipment Serial No.', r('equipment_serial_no')),
            Field('Alternator Brand/Model', r('alternator_brand_model')),
            Field('Alternator Serial No.', r('alternator_serial_no')),
            Field('Location', r('location')),
            Field('Date in Service', format_date(r('date_in_service'))),
            Field('Rating', r('rating')),
            Field('Revolution', r('revolution')),
            Field('Starting Voltage', r('starting_voltage')),
            Field('Running Hours', r('running_hours')),
        ]),
        SectionHeader('Technical Specifications'),
        grid([
            Field('Fuel Pump Serial No.', r('fuel_pump_serial_no')),
            Field('Fuel Pump Code', r('fuel_pump_code')),
            Field('Lube Oil Type', r('lube_oil_type')),
            Field('Fuel Type', r('fuel_type')),
            Field('Cooling Water Additives', r('cooling_water_additives'), span=2),
            Field('Date Failed', format_date(r('date_failed'))),
            Field('Turbo Model', r('turbo_model')),
            Field('Turbo Serial No.', r('turbo_serial_no')),
        ]),
        SectionHeader('Service Details'),
        TextBlock('Customer Complaint', r('customer_complaint')),
        TextBlock('Possible Cause', r('possible_cause')),
        TextBlock('Observation', r('observation')),
        TextBlock('Findings', r('findings')),
        TextBlock('Action Taken', r('action_taken')),
        TextBlock('Recommendations', r('recommendations')),
        TextBlock('Summary Details', r('summary_details')),
        SectionHeader('Warranty Information'),
        grid([
            Field('Within Coverage Period', format_boolean(r('within_coverage_period'))),
            Field('Warrantable Failure', format_boolean(r('warrantable_failure'))),
        ]),
        SectionHeader('Signatures'),
        grid([
            Field('Service Technician', r('service_technician')),
            Field('Approved By', r('approved_by')),
            Field('Acknowledged By', r('acknowledged_by')),
        ]),
    ]


# --------------------------------------------------------------------------- #
# Job order request
# --------------------------------------------------------------------------- #


def build_job_order_request(record: Record, attachments: Sequence[Record], settings: Settings) -> list[Element]:
    r = record.get
    currency = settings.currency_symbol
    elements: list[Element] = [
        letterhead('Job Order Request Form', settings),
        SectionHeader('Job Order Information'),
        grid([
            Field('Shop/Field J.O. Number', r('shop_field_jo_number')),
            Field('Date Prepared', format_date(r('date_prepared'))),
        ]),
        SectionHeader('Customer Information'),
        grid([
            Field('Full Customer Name', r('full_customer_name'), span=2),
            Field('Address', r('address'), span=2),
            Field('Location of Unit', r('location_of_unit'), span=2),
            Field('Contact Person', r('contact_person')),
            Field('Telephone Numbers', r('telephone_numbers')),
        ]),
        SectionHeader('Equipment Details'),
        grid([
            Field('Particulars', r('particulars'), span=2),
            Field('Equipment Model', r('equipment_model')),
            Field('Equipment Number', r('equipment_number')),
            Field('Engine Model', r('engine_model')),
            Field('Engine Serial Number (ESN)', r('esn')),
        ]),
        SectionHeader('Service Details'),
        TextBlock('Complaints', r('complaints')),
        TextBlock('Work To Be Done', r('work_to_be_done')),
        grid([
            Field('Preferred Service Date', format_date(r('preferred_service_date'))),
            Field('Preferred Service Time', format_time(r('preferred_service_time'))),
            Field('Charges Absorbed By', r('charges_absorbed_by'), span=2),
        ]),
        SectionHeader('Attached References'),
        grid([
            Field('Quotation Reference', r('qtn_ref')),
            Field("Customer's PO/Warranty Claim No.", r('customers_po_wty_claim_no')),
            Field('Delivery Receipt Number', r('dr_number')),
        ]),
        SectionHeader('Request and Approval'),
        signatures([
            SignatureEntry('Sales/Service Engineer', 'Requested By', r('requested_by_name'), r('requested_by_signature')),
            SignatureEntry('Department Head', 'Approved By', r('approved_by_name'), r('approved_by_signature')),
            SignatureEntry(
                'Service Dept.',
                'Received By',
                r('received_by_service_dept_name'),
                r('received_by_service_dept_signature'),
            ),
            SignatureEntry(
                'Credit & Collection',
                'Received By',
                r('received_by_credit_collection_name'),
                r('received_by_credit_collection_signature'),
            ),
        ]),
        SectionHeader('Service Use Only'),
        grid([
            Field('Estimated Repair Days', r('estimated_repair_days')),
            Field('Technicians Involved', r('technicians_involved'), span=2),
            Field('Date Job Started', format_date(r('date_job_started'))),
            Field('Date Job Completed/Closed', format_date(r('date_job_completed_closed'))),
        ]),
        SectionHeader('Cost Breakdown'),
        grid([
            Field('Parts Cost', format_currency(r('parts_cost'), currency)),
            Field('Labor Cost', format_currency(r('labor_cost'), currency)),
            Field('Other Cost', format_currency(r('other_cost'), currency)),
            Field('Total Cost', format_currency(r('total_cost'), currency)),
            Field('Date of Invoice', format_date(r('date_of_invoice'))),
            Field('Invoice Number', r('invoice_number')),
        ]),
        SectionHeader('Remarks'),
        TextBlock('Remarks', r('remarks')),
        SectionHeader('Verification'),
        signatures([SignatureEntry('Verified By', None, r('verified_by_name'), r('verified_by_signature'))]),
    ]
    elements += attachments_gallery('Attachments', attachments, 'file_name')
    return elements


# --------------------------------------------------------------------------- #
# Engine teardown report
# --------------------------------------------------------------------------- #

BEARING_CAUSES = (
    ('Fine Particle Abrasion', 'fine_particle_abrasion'),
    ('Coarse Particle Abrasion', 'coarse_particle_abrasion'),
    ('Immobile Dirt Particle', 'immobile_dirt_particle'),
    ('Insufficient Lubricant', 'insufficient_lubricant'),
    ('Water in Lubricant', 'water_in_lubricant'),
    ('Fuel in Lubricant', 'fuel_in_lubricant'),
    ('Chemical Corrosion', 'chemical_corrosion'),
    ('Cavitation Long Idle Period', 'cavitation_long_idle_period'),
    ('Oxide Build-up', 'oxide_buildup'),
    ('Cold Start', 'cold_start'),
    ('Hot Shut Down', 'hot_shut_down'),
    ('Offside Wear', 'offside_wear'),
    ('Thrust Load Failure', 'thrust_load_failure'),
    ('Installation Technique', 'installation_technique'),
    ('Dislocation of Bearing', 'dislocation_of_bearing'),
)

CONNECTING_ROD_CAUSES = (
    'process_imperfection', 'forming_machining_faults', 'critical_design_feature', 'hydraulic_lock',
    'bending', 'foreign_materials', 'misalignment', 'others', 'bearing_failure',
)
CONROD_BUSH_CAUSES = (
    'piston_cracking', 'dirt_entry', 'oil_contamination', 'cavitation',
    'counter_weighting', 'corrosion', 'thermal_fatigue', 'others',
)
CAMSHAFT_CAUSES = ('serviceable', 'bushing_failure', 'lobe_follower_failure', 'overhead_adjustment', 'others')
PISTON_CAUSES = (
    'serviceable', 'scored', 'crown_damage', 'burning', 'piston_fracture',
    'thrust_anti_thrust_scoring', 'ring_groove_wear', 'pin_bore_wear',
)
CYLINDER_LINER_CAUSES = ('serviceable', 'scoring', 'corrosion', 'cracking', 'fretting', 'cavitation', 'pin_holes')

CRANKSHAFT_CAUSES = (
    'excessive_load', 'mismatch_gears_transmission', 'bad_radius_blend_fillets',
    'bearing_failure', 'cracked', 'others', 'contamination',
)
CYLINDER_HEAD_CAUSES = (
    'cracked_valve_injector_port', 'valve_failure', 'cracked_valve_port',
    'broken_valve_spring', 'cracked_head_core', 'others_scratches_pinholes',
)
ENGINE_VALVE_CAUSES = (
    'serviceable', 'erosion_fillet', 'thermal_fatigue', 'stuck_up',
    'broken_stem', 'guttering_channeling', 'others', 'mechanical_fatigue',
)

TEARDOWN_COMPONENTS = (
    (14, 'Timing Gear', 'timing_gear'),
    (15, 'Turbo Chargers', 'turbo_chargers'),
    (16, 'Accessories Drive', 'accessories_drive'),
    (17, 'Idler Gear', 'idler_gear'),
    (18, 'Oil Pump', 'oil_pump'),
    (19, 'Water Pump', 'water_pump'),
    (20, 'Starting Motor', 'starting_motor'),
    (21, 'Charging Alternator', 'charging_alternator'),
)

MAJOR_COMPONENTS = (
    'cylinder_block', 'crankshaft', 'camshaft', 'connecting_rod', 'timing_gear', 'idler_gear',
    'accessory_drive_gear', 'water_pump_drive_gear', 'cylinder_head', 'oil_cooler', 'exhaust_manifold',
    'turbo_chargers', 'intake_manifold', 'flywheel_housing', 'flywheel', 'ring_gear', 'oil_pan',
    'front_engine_support', 'rear_engine_support', 'front_engine_cover', 'pulleys', 'fan_hub',
    'air_compressor', 'injection_pump',
)

TEARDOWN_SELECT = ', '.join([
    '*',
    'cylinder_block_inspections(*)',
    'main_bearing_inspections(*)',
    'con_rod_bearing_inspections(*)',
    'connecting_rod_arm_inspections(*)',
    'conrod_bush_inspections(*)',
    'crankshaft_inspections(*)',
    'camshaft_inspections(*)',
    'vibration_damper_inspections(*)',
    'cylinder_head_inspections(*)',
    'engine_valve_inspections(*)',
    'valve_crosshead_inspections(*)',
    'piston_inspections(*)',
    'cylinder_liner_inspections(*)',
    'component_inspections(*)',
    'missing_components(*)',
    'major_components_summary(*)',
])


def _cause_items(data: Record, keys: Sequence[str]) -> list[CheckboxItem]:
    return [CheckboxItem(humanize(key), bool(data.get(key))) for key in keys]


def _bank_items(left: Record, right: Record, keys: Sequence[str]) -> list[CheckboxItem]:
    # Two columns: left bank down the first, right bank down the second.
    items: list[CheckboxItem] = []
    for key in keys:
        items.append(CheckboxItem(f'Left: {humanize(key)}', bool(left.get(key))))
        items.append(CheckboxItem(f'Right: {humanize(key)}', bool(right.get(key))))
    return items


def _comments(data: Record, label: str = 'Comments') -> Element:
    return grid([Field(label, data.get('comments'), span=2)])


def build_engine_teardown(record: Record, attachments: Sequence[Record], settings: Settings) -> list[Element]:
    r = record.get
    cylinder_block = first_row(r('cylinder_block_inspections'))
    main_bearing = first_row(r('main_bearing_inspections'))
    con_rod_bearing = first_row(r('con_rod_bearing_inspections'))
    crankshaft = first_row(r('crankshaft_inspections'))
    vibration_damper = first_row(r('vibration_damper_inspections'))
    cylinder_head = first_row(r('cylinder_head_inspections'))
    engine_valve = first_row(r('engine_valve_inspections'))
    valve_crosshead = first_row(r('valve_crosshead_inspections'))
    missing = first_row(r('missing_components'))
    major = first_row(r('major_components_summary'))
    components = mapping_rows(r('component_inspections'))

    elements: list[Element] = [
        letterhead('Engine Teardown Report', settings),
        SectionHeader('Basic Information'),
        grid([
            Field('Customer', r('customer')),
            Field('Job Number', r('job_number')),
            Field('Engine Model', r('engine_model')),
            Field('Serial No.', r('serial_no')),
        ]),
        SectionHeader('1. Cylinder Block'),
        grid(
            [
                Field('Cam Shaft Bushing Bore', cylinder_block.get('cam_shaft_bushing_bore')),
                Field('Cylinder Liner Counter Bore', cylinder_block.get('cylinder_liner_counter_bore')),
                Field('Liner to Block Clearance', cylinder_block.get('liner_to_block_clearance')),
                Field('Lower Liner Bore', cylinder_block.get('lower_liner_bore')),
                Field('Upper Liner Bore', cylinder_block.get('upper_liner_bore')),
                Field('Top Deck', cylinder_block.get('top_deck')),
            ],
            columns=3,
        ),
        _comments(cylinder_block),
        SectionHeader('2. Main Bearings', 'Cause'),
        checkboxes([CheckboxItem(label, bool(main_bearing.get(key))) for label, key in BEARING_CAUSES]),
        _comments(main_bearing),
        SectionHeader('3. Con Rod Bearings', 'Cause'),
        checkboxes([CheckboxItem(label, bool(con_rod_bearing.get(key))) for label, key in BEARING_CAUSES]),
        _comments(con_rod_bearing),
    ]

    for title, relation, keys in (
        ('4. Connecting Rod Arms', 'connecting_rod_arm_inspections', CONNECTING_ROD_CAUSES),
        ('5. Conrod Bushes', 'conrod_bush_inspections', CONROD_BUSH_CAUSES),
    ):
        left = bank_row(r(relation), 'left')
        elements += [
            SectionHeader(title),
            checkboxes(_bank_items(left, bank_row(r(relation), 'right'), keys), columns=2),
            _comments(left),
        ]

    elements += [
        SectionHeader('6. Crankshaft'),
        grid([Field('Status', format_status(crankshaft.get('status')))]),
        checkboxes(_cause_items(crankshaft, CRANKSHAFT_CAUSES)),
        _comments(crankshaft),
    ]
    camshaft_left = bank_row(r('camshaft_inspections'), 'left')
    elements += [
        SectionHeader('7. Camshaft'),
        checkboxes(_bank_items(camshaft_left, bank_row(r('camshaft_inspections'), 'right'), CAMSHAFT_CAUSES), columns=2),
        _comments(camshaft_left),
        SectionHeader('8. Vibration Damper'),
        checkboxes(_cause_items(vibration_damper, ('serviceable', 'running_hours', 'others'))),
        _comments(vibration_damper),
        SectionHeader('9. Cylinder Heads'),
        grid([Field('Status', format_status(cylinder_head.get('status')))]),
        checkboxes(_cause_items(cylinder_head, CYLINDER_HEAD_CAUSES)),
        _comments(cylinder_head),
        SectionHeader('10. Engine Valves'),
        checkboxes(_cause_items(engine_valve, ENGINE_VALVE_CAUSES)),
        _comments(engine_valve),
        SectionHeader('11. Valve Crossheads'),
        checkboxes(_cause_items(valve_crosshead, ('serviceable',))),
        _comments(valve_crosshead),
    ]

    for title, relation, keys in (
        ('12. Pistons', 'piston_inspections', PISTON_CAUSES),
        ('13. Cylinder Liners', 'cylinder_liner_inspections', CYLINDER_LINER_CAUSES),
    ):
        left = bank_row(r(relation), 'left')
        elements += [
            SectionHeader(title),
            checkboxes(_bank_items(left, bank_row(r(relation), 'right'), keys), columns=2),
            _comments(left),
        ]

    for number, title, component_type in TEARDOWN_COMPONENTS:
        data = next((row for row in components if row.get('component_type') == component_type), {})
        elements += [
            SectionHeader(f'{number}. {title}'),
            checkboxes(_cause_items(data, ('serviceable',))),
            _comments(data),
        ]

    elements += [
        SectionHeader('22. Missing Components'),
        grid([Field('Component Description', missing.get('component_description'), span=2)]),
        SectionHeader('23. Major Components Summary'),
        grid([Field(humanize(key), major.get(key)) for key in MAJOR_COMPONENTS], columns=3),
        grid([Field('Others', major.get('others'), span=2)]),
    ]
    elements += [
        SectionHeader('Signatures'),
        signatures([
            SignatureEntry(
                'Signed by Technician',
                'Service Technician',
                r('service_technician_name'),
                r('service_technician_signature'),
            ),
            SignatureEntry('Service Manager', 'Noted By', r('noted_by_name'), r('noted_by_signature')),
            SignatureEntry('Authorized Signature', 'Approved By', r('approved_by_name'), r('approved_by_signature')),
            SignatureEntry(
                'Customer Signature',
                'Acknowledged By',
                r('acknowledged_by_name'),
                r('acknowledged_by_signature'),
            ),
        ]),
    ]
    return elements


# --------------------------------------------------------------------------- #
# Daily time sheet
# --------------------------------------------------------------------------- #

TIME_SHEET_HEADERS = ('DATE', 'START', 'STOP', 'TOTAL', 'JOB DESCRIPTION')
TIME_SHEET_COLUMN_WIDTHS = (25.0, 18.0, 18.0, 18.0, 101.0)


def _sort_order(row: Record) -> float:
    try:
        return float(row.get('sort_order') or 0)
    except (TypeError, ValueError):
        return 0.0


def build_daily_time_sheet(record: Record, attachments: Sequence[Record], settings: Settings) -> list[Element]:
    r = record.get
    entries = sorted(
        mapping_rows(r('daily_time_sheet_entries')),
        key=_sort_order,
    )
    rows = tuple(
        (
            format_date(entry.get('entry_date')),
            format_time(entry.get('start_time')),
            format_time(entry.get('stop_time')),
            format_hours(entry.get('total_hours')),
            entry.get('job_description'),
        )
        for entry in entries
    )

    elements: list[Element] = [
        letterhead('Daily Time Sheet', settings),
        SectionHeader('Job Information'),
        grid([
            Field('Customer', r('customer'), span=2),
            Field('Address', r('address'), span=2),
            Field('Job No.', r('job_number')),
            Field('Date', format_date(r('date'))),
        ]),
        SectionHeader('Manhours', 'Pls. indicate specific component & eng. model'),
        Table(headers=TIME_SHEET_HEADERS, rows=rows, column_widths=TIME_SHEET_COLUMN_WIDTHS),
        grid([
            Field('Total Manhours', format_hours(r('total_manhours'))),
            Field('Grand Total Manhours (Reg. + O.T.)', format_hours(r('grand_total_manhours'))),
        ]),
        SectionHeader('For Service Office Only'),
        grid([
            Field('Total SRT', r('total_srt')),
            Field('Chk. By', r('checked_by')),
            Field('Actual Manhour', r('actual_manhour')),
            Field("Svc. Co'rdntr", r('service_coordinator')),
            Field('Performance', r('performance')),
            Field('Apvd. By', r('approved_by_service')),
            Field('Note', 'Actual manhour = regular + overtime; performance = SRT / actual manhour', span=2),
            Field('Svc. Manager', r('service_manager')),
        ]),
        SectionHeader('Signatures'),
        signatures([
            SignatureEntry('Print Name / Signature', 'Performed By', r('performed_by_name'), r('performed_by_signature')),
            SignatureEntry('Supervisor', 'Approved By', r('approved_by_name'), r('approved_by_signature')),
        ]),
    ]
    elements += attachments_gallery('Attachments', attachments, 'file_name')
    return elements


# --------------------------------------------------------------------------- #
# Engine inspection / receiving report
# --------------------------------------------------------------------------- #

InspectionItems = tuple[tuple[str, str], ...]

# (numeral, title, ((sub-section label, items), ...))
INSPECTION_SECTIONS: tuple[tuple[str, str, tuple[tuple[str, InspectionItems], ...]], ...] = (
    ('I', 'Front End Inspection', (
        ('1. Liquid Cooled Engine', (
            ('lce_radiator', 'Radiator'),
            ('lce_radiator_fan', 'Radiator Fan'),
            ('lce_shroud', 'Shroud'),
            ('lce_radiator_fan_pulley', 'Radiator Fan Pulley'),
            ('lce_water_pump', 'Water Pump'),
            ('lce_water_pump_pulley', 'Water Pump Pulley'),
        )),
        ('2. Air Cooled Engine', (
            ('ace_cooling_air_blower', 'Cooling Air Blower'),
            ('ace_impeller', 'Impeller'),
            ('ace_cooling_blower_pulley', 'Cooling Blower Pulley'),
            ('ace_air_blower_housing', 'Air Blower Housing'),
            ('ace_oil_supply_pipe', 'Oil Supply Pipe'),
            ('ace_oil_return_line', 'Oil Return Line'),
            ('ace_tensioner_pulley', 'Tensioner Pulley'),
            ('ace_blower_v_belt', 'Blower V-belt'),
            ('ace_switch_v_belt_rips', 'Switch for V-belt Rips'),
        )),
        ('', (
            ('acc_drive_pulley', 'Acc. Drive Pulley'),
            ('air_comp_water_tubes', 'Air Comp. Water Tubes'),
            ('vibration_damper', 'Vibration Damper'),
            ('thermostat_housing', 'Thermostat Housing'),
            ('front_gear_cover', 'Front Gear Cover'),
            ('lifting_bracket', 'Lifting Bracket'),
            ('front_engine_support', 'Front Engine Support'),
            ('crankshaft_pulley', 'Crankshaft Pulley'),
            ('air_cleaner_housing', 'Air Cleaner Housing'),
            ('air_cleaner_mounting', 'Air Cleaner Mounting'),
            ('air_cleaner_restriction_ind', 'Restriction Indicator'),
        )),
    )),
    ('II', 'Right Side Inspection', (
        ('', (
            ('power_steering_pump', 'Power Steering Pump'),
            ('rs_accessory_drive', 'Accessory Drive'),
            ('rs_air_compressor', 'Air Compressor'),
            ('fuel_injection_pump', 'Fuel Injection Pump'),
            ('fip_pump_code', 'Pump Code'),
            ('fip_pump_sn', 'Pump S/N'),
            ('fip_injection_pump_mounting', 'Injection Pump Mounting'),
            ('fip_oil_supply_pipe', 'Oil Supply Pipe'),
            ('fip_oil_return_pipe', 'Oil Return Pipe'),
            ('fip_pipe_pump_to_filter', 'Pipe from Fuel Pump to Fuel Filter'),
            ('fip_pipe_filter_to_pump', 'Pipe from Filter to Injection Pump'),
            ('fip_pre_filter_housing', 'Pre-Filter Housing'),
            ('fip_high_pressure_pipes', 'High Pressure Pipes'),
            ('overflow_valve', 'Overflow Valve'),
            ('overflow_valve_return_pipe', 'Return Pipe for Overflow Valve'),
            ('fuel_feed_pump', 'Fuel Feed Pump'),
            ('rs_injectors', 'Injectors'),
            ('injector_return_pipe', 'Injector Return Pipe'),
            ('shutdown_valve_solenoid', 'Shutdown Valve/Solenoid'),
            ('shutdown_valve_voltage', 'Voltage'),
            ('rs_rocker_lever_housing', 'Rocker Lever Housing'),
            ('rs_cylinder_head', 'Cylinder Head'),
            ('rs_intake_manifold', 'Intake Manifold'),
            ('rs_intake_connection', 'Intake Connection'),
            ('rs_intake_crossover', 'Intake Crossover'),
            ('rs_aftercooler', 'After cooler/Charge Air Cooler'),
            ('cam_follower', 'Cam Follower'),
            ('lube_oil_pump', 'Lube Oil Pump'),
            ('oil_pan', 'Oil Pan'),
            ('rs_oil_cooler', 'Oil Cooler'),
            ('rs_oil_filter_housing', 'Oil Filter Housing'),
            ('rs_turbocharger', 'Turbocharger'),
            ('rs_turbo_oil_supply_pipe', 'Turbocharger Oil Supply Pipe'),
            ('rs_turbo_oil_return_pipe', 'Turbocharger Oil Return Pipe'),
            ('rs_water_connection', 'Water Connection'),
            ('rs_fuel_manifold', 'Fuel Manifold'),
            ('engine_brake', 'Engine Brake'),
            ('rs_hand_hole_cover', 'Hand Hole Cover'),
        )),
    )),
    ('III', 'Rear End Inspection', (
        ('', (
            ('flywheel', 'Flywheel'),
            ('flywheel_sae_no', 'SAE No.'),
            ('flywheel_size', 'Size'),
            ('flywheel_type', 'Type'),
            ('flywheel_housing', 'Flywheel Housing'),
            ('fh_sae_no', 'SAE No.'),
            ('fh_size', 'Size'),
            ('fh_type', 'Type'),
            ('fh_magnetic_pickup', 'Magnetic Pick-up'),
            ('rear_water_connection', 'Water Connection'),
        )),
    )),
    ('IV', 'Left Side Inspection', (
        ('', (
            ('water_manifold_front', 'Water Manifold - Front'),
            ('water_manifold_rear', 'Water Manifold - Rear'),
            ('water_manifold_center', 'Water Manifold - Center'),
            ('exhaust_manifold_front', 'Exhaust Manifold - Front'),
            ('exhaust_manifold_rear', 'Exhaust Manifold - Rear'),
            ('exhaust_manifold_center', 'Exhaust Manifold - Center'),
            ('ls_intake_manifold', 'Intake Manifold'),
            ('ls_intake_connection', 'Intake Connection'),
            ('ls_intake_crossover', 'Intake Crossover'),
            ('ls_aftercooler', 'After cooler/Charge Air Cooler'),
            ('corrosion_resistor', 'Corrosion Resistor'),
            ('water_header_cover', 'Water Header Cover'),
            ('starter', 'Starter'),
            ('starter_electric_volt', 'Electric (Volt)'),
            ('starter_air', 'Air'),
            ('charging_alternator', 'Charging Alternator'),
            ('charging_alt_v_belt', 'V-belt'),
            ('charging_alt_mounting_base', 'Mounting Base'),
            ('ls_oil_cooler', 'Oil Cooler'),
            ('hydraulic_pump', 'Hydraulic Pump'),
            ('ls_fuel_manifold', 'Fuel Manifold'),
            ('ls_oil_filter_housing', 'Oil Filter Housing'),
            ('ls_turbocharger', 'Turbocharger'),
            ('dipstick', 'Dipstick'),
            ('ls_hand_hole_cover', 'Hand Hole Cover'),
            ('ls_rocker_lever_housing', 'Rocker Lever Housing'),
            ('ls_cylinder_head', 'Cylinder Head'),
            ('ls_fuel_manifold_2', 'Fuel Manifold'),
        )),
    )),
    ('V', 'Others', (
        ('', (
            ('fuel_filter', 'Fuel Filter'),
            ('oil_filter', 'Oil Filter'),
            ('oil_filter_horizontal', 'Horizontal Mounted'),
            ('oil_filter_remote', 'Remote Mounted'),
            ('oil_by_pass_filter', 'Oil By-Pass Filter'),
            ('oth_oil_filter_housing', 'Oil Filter Housing'),
            ('oil_filler_cap', 'Oil Filler Cap'),
            ('oil_pressure_sensor', 'Oil Pressure Sensor'),
            ('oil_temperature_sensor', 'Oil Temperature Sensor'),
            ('coolant_temperature_sensor', 'Coolant Temperature Sensor'),
            ('acd_front_side', 'Air Cooling Ducting - Front Side'),
            ('acd_hood_cover', 'Air Cooling Ducting - Hood Cover'),
            ('acd_lower_side', 'Air Cooling Ducting at Lower Side'),
            ('acd_upper_side', 'Air Cooling Ducting at Upper Side'),
            ('acd_cover_rear_side', 'Cover at Rear Side'),
            ('acd_air_baffle', 'Air Baffle'),
            ('acd_upper_rail_bar', 'Upper Rail Bar'),
            ('acd_lower_rail_bar', 'Lower Rail Bar'),
            ('shutdown_linkage_mechanical', 'Shut Down Linkage (Mechanical)'),
            ('solenoid_linkage_electrical', 'Solenoid Linkage (Electrical)'),
        )),
    )),
    ('VI', 'Construction Engines', (
        ('', (
            ('flywheel_flex_plate', 'Flywheel Flex Plate'),
            ('torque_conv_cooler', 'Torque Conv. Cooler'),
        )),
    )),
    ('VII', 'Marine Engines', (
        ('', (
            ('heat_exchanger', 'Heat Exchanger'),
            ('sea_water_pump', 'Sea Water Pump'),
            ('water_cooler', 'Water Cooler'),
            ('front_power_take_off', 'Front Power Take-off'),
            ('keel_cooling', 'Keel Cooling'),
        )),
    )),
    ('VIII', 'Generating Set Engines', (
        ('', (
            ('engine_governor', 'Engine Governor'),
            ('over_speed_safety_control', 'Over Speed Safety Control'),
            ('governor_control', 'Governor Control'),
            ('main_alternator', 'Main Alternator'),
            ('ma_voltage_regulator', 'Voltage Regulator'),
            ('ma_main_stator', 'Main Stator'),
            ('ma_rotor', 'Rotor'),
            ('ma_output_terminal_block', 'Output Terminal Block'),
            ('ma_exciter', 'Exciter'),
            ('instrument_panel', 'Instrument Panel'),
        )),
    )),
    ('IX', 'Industrial Engines', (
        ('', (('vernier_throttle_control', 'Vernier Throttle Control'),)),
    )),
    ('X', 'Check Thoroughly', (
        ('', (
            ('cyl_block_cracks_breakage', 'Cylinder Block - For cracks/breakage'),
            ('cyl_block_sign_of_welding', 'Cylinder Block - For any sign of welding'),
            ('crankshaft_rotate_both_dir', 'Crankshaft - Secure front end, rotate both directions from flywheel end'),
            ('crankshaft_pry_bar_front_rear', 'Crankshaft - Pry crankshaft toward front & rear'),
            ('crankshaft_pry_bar_conrod', 'Crankshaft - Pry between #4 connecting rod & counter weight'),
            ('crankshaft_rotate_flywheel', 'Crankshaft - Rotate from flywheel end without securing front end'),
        )),
    )),
    ('XI', 'Exhaust System', (
        ('', (
            ('flexible_pipe', 'Flexible Pipe'),
            ('exhaust_elbow', 'Exhaust Elbow'),
            ('muffler', 'Muffler'),
        )),
    )),
)

INSPECTION_HEADERS = ('ITEM DESCRIPTION', 'FIELD STATUS', 'FIELD REMARKS', 'SHOP STATUS', 'SHOP REMARKS')
INSPECTION_COLUMN_WIDTHS = (50.0, 16.0, 49.0, 16.0, 49.0)


def inspection_status(value: Any) -> str | None:
    """``s``/``ns`` codes as printed on the form; blanks stay blank for the dash."""
    text = str(value or '').strip()
    return text.upper() or None


def build_engine_inspection_receiving(
    record: Record,
    attachments: Sequence[Record],
    settings: Settings,
) -> list[Element]:
    r = record.get
    items = {str(row.get('item_key')): row for row in mapping_rows(r('engine_inspection_items'))}

    elements: list[Element] = [
        letterhead('Engine Inspection / Receiving Report', settings),
        SectionHeader('Header Information'),
        grid(
            [
                Field('Customer', r('customer')),
                Field('JO Date', format_date(r('jo_date'))),
                Field('JO Number', r('jo_number')),
                Field('Address', r('address'), span=2),
                Field('ERR No.', r('err_no')),
            ],
            columns=3,
        ),
        SectionHeader('Engine Details'),
        grid(
            [
                Field('Engine Maker', r('engine_maker')),
                Field('Application', r('application')),
                Field('Engine Model', r('engine_model')),
                Field('Engine Serial Number', r('engine_serial_number')),
                Field('Date Received', format_date(r('date_received'))),
                Field('Date Inspected', format_date(r('date_inspected'))),
                Field('Engine RPM', r('engine_rpm')),
                Field('Engine KW', r('engine_kw')),
            ],
            columns=4,
        ),
    ]

    for numeral, title, sub_sections in INSPECTION_SECTIONS:
        for sub_label, section_items in sub_sections:
            rows = []
            for key, label in section_items:
                data = items.get(key, {})
                rows.append((
                    label,
                    inspection_status(data.get('field_status')),
                    data.get('field_remarks'),
                    inspection_status(data.get('shop_status')),
                    data.get('shop_remarks'),
                ))
            elements += [
                SectionHeader(f'{numeral}. {title}', sub_label or None),
                Table(headers=INSPECTION_HEADERS, rows=tuple(rows), column_widths=INSPECTION_COLUMN_WIDTHS),
            ]

    elements += [
        SectionHeader('XII. Modification of the Engine'),
        TextBlock('Modification', r('modification_of_engine')),
        SectionHeader('XIII. Missing Parts'),
        TextBlock('Missing Parts', r('missing_parts')),
        SectionHeader('Signatures'),
        signatures([
            SignatureEntry(
                'Signed by Technician',
                'Service Technician',
                r('service_technician_name'),
                r('service_technician_signature'),
            ),
            SignatureEntry('Authorized Signature', 'Approved By', r('approved_by_name'), r('approved_by_signature')),
            SignatureEntry('Service Manager', 'Noted By', r('noted_by_name'), r('noted_by_signature')),
            SignatureEntry(
                'Customer Signature',
                'Acknowledged By',
                r('acknowledged_by_name'),
                r('acknowledged_by_signature'),
            ),
        ]),
    ]
    return elements


# --------------------------------------------------------------------------- #
# Components teardown measuring report
# --------------------------------------------------------------------------- #

STANDARD_LIMITS = (('Spec Min', 'spec_min'), ('Spec Max', 'spec_max'), ('Wear Limit', 'spec_wear_limit'))
OVERSIZE_LIMITS = (('Spec Min', 'spec_min'), ('Spec Max', 'spec_max'), ('Oversize Limit', 'spec_oversize_limit'))
RING_LIMITS = (
    ('Ring 1 Min', 'ring_1_min'),
    ('Ring 1 Max', 'ring_1_max'),
    ('Ring 2 Min', 'ring_2_min'),
    ('Ring 2 Max', 'ring_2_max'),
)
JOURNAL_MP_ABC = (
    ('Journal', 'MP', 'A', 'B', 'C'),
    ('journal_no', 'measuring_point', 'measurement_a', 'measurement_b', 'measurement_c'),
)
RING_VALUES = (
    ('Piston', '1st Ring', '2nd Ring', '3rd Ring'),
    ('piston_no', 'ring_1_value', 'ring_2_value', 'ring_3_value'),
)
VALVE_VALUES = (('Cyl', 'Intake', 'Exhaust'), ('cylinder_no', 'intake_value', 'exhaust_value'))


@dataclass(frozen=True)
class MeasuringSection:
    """One measured component: a ``ctmr_<name>`` row with its ``ctmr_<name>_data`` readings."""

    name: str
    title: str
    page: str
    limits: tuple[tuple[str, str], ...]
    headers: tuple[str, ...]
    columns: tuple[str, ...]

    @property
    def table(self) -> str:
        return f'ctmr_{self.name}'

    @property
    def data_table(self) -> str:
        return f'ctmr_{self.name}_data'


MEASURING_SECTIONS = (
    MeasuringSection(
        'cylinder_bore', 'Cylinder Bore', 'Page 1', STANDARD_LIMITS,
        ('Bank', 'Cyl', 'Pt', '1', '2', '3'),
        ('bank', 'cylinder_no', 'data_point', 'measurement_1', 'measurement_2', 'measurement_3'),
    ),
    MeasuringSection(
        'cylinder_liner', 'Cylinder Liner', 'Page 2',
        (
            ('Liner Seating Min', 'liner_seating_min'),
            ('Liner Seating Max', 'liner_seating_max'),
            ('Liner Collar Min', 'liner_collar_min'),
            ('Liner Collar Max', 'liner_collar_max'),
        ),
        ('Section', 'Cyl', 'A', 'B', 'C', 'D'),
        ('section', 'cylinder_no', 'measurement_a', 'measurement_b', 'measurement_c', 'measurement_d'),
    ),
    MeasuringSection(
        'main_bearing_bore', 'Main Bearing Bore', 'Page 3', STANDARD_LIMITS,
        ('Bore', 'Axis', 'A', 'B', 'C'),
        ('bore_no', 'axis', 'measurement_a', 'measurement_b', 'measurement_c'),
    ),
    MeasuringSection(
        'camshaft_bushing', 'Camshaft Bushing', 'Page 4', STANDARD_LIMITS,
        ('Bush', 'MP', 'A', 'B'),
        ('bush_no', 'measuring_point', 'measurement_a', 'measurement_b'),
    ),
    MeasuringSection(
        'main_journal', 'Main Journal Diameter', 'Page 5',
        (('Spec Min', 'spec_min'), ('Spec Max', 'spec_max'), ('Max Ovality', 'spec_max_ovality')),
        ('Journal', 'MP', 'A', 'B'),
        ('journal_no', 'measuring_point', 'measurement_a', 'measurement_b'),
    ),
    MeasuringSection(
        'main_journal_width', 'Main Journal Width (Thrust Bearing)', 'Page 6', OVERSIZE_LIMITS,
        ('Journal', 'A', 'B', 'C', 'D'),
        ('journal_no', 'measurement_a', 'measurement_b', 'measurement_c', 'measurement_d'),
    ),
    MeasuringSection(
        'con_rod_journal', 'Con Rod Journal Diameter', 'Page 7', OVERSIZE_LIMITS,
        ('Journal', 'Axis', 'A', 'B', 'C'),
        ('journal_no', 'axis', 'measurement_a', 'measurement_b', 'measurement_c'),
    ),
    MeasuringSection(
        'crankshaft_true_running', 'Crankshaft True Running (Straightness)', 'Page 8',
        (('Wear Limit (4 Cyl)', 'wear_limit_4_cylinder'), ('Wear Limit (6 Cyl)', 'wear_limit_6_cylinder')),
        ('Journal', 'Measured Value'),
        ('journal_no', 'measured_value'),
    ),
    MeasuringSection(
        'small_end_bush', 'Small End Bush', 'Page 9', STANDARD_LIMITS,
        ('Con Rod', 'Datum', 'A', 'B'),
        ('con_rod_arm_no', 'datum', 'measurement_a', 'measurement_b'),
    ),
    MeasuringSection(
        'big_end_bearing', 'Big End Bearing', 'Page 10', STANDARD_LIMITS,
        ('Con Rod', 'MP', 'A', 'B'),
        ('con_rod_arm_no', 'measuring_point', 'measurement_a', 'measurement_b'),
    ),
    MeasuringSection(
        'connecting_rod_arm', 'Connecting Rod Arm', 'Page 11', STANDARD_LIMITS,
        ('Arm', 'Bank', 'Measurement'),
        ('arm_no', 'bank', 'measurement'),
    ),
    MeasuringSection(
        'piston_pin_bush_clearance', 'Piston Pin Bush Radial Clearance', 'Page 12', STANDARD_LIMITS,
        ('Conrod', 'MP', 'A', 'B', 'C'),
        ('conrod_arm_no', 'measuring_point', 'measurement_a', 'measurement_b', 'measurement_c'),
    ),
    MeasuringSection(
        'camshaft_journal_diameter', 'Camshaft Journal Diameter', 'Page 13', STANDARD_LIMITS, *JOURNAL_MP_ABC
    ),
    MeasuringSection(
        'camshaft_bush_clearance', 'Camshaft Bush Radial Clearance', 'Page 14', STANDARD_LIMITS, *JOURNAL_MP_ABC
    ),
    MeasuringSection('camlobe_height', 'Camlobe Height', 'Page 15', STANDARD_LIMITS, *JOURNAL_MP_ABC),
    MeasuringSection(
        'cylinder_liner_bore', 'Cylinder Liner Bore', 'Page 16', STANDARD_LIMITS,
        ('Cyl', 'MP', 'A', 'B', 'C', 'D'),
        ('cylinder_no', 'measuring_point', 'measurement_a', 'measurement_b', 'measurement_c', 'measurement_d'),
    ),
    MeasuringSection('piston_ring_gap', 'Piston Ring Gap', 'Page 17', RING_LIMITS, *RING_VALUES),
    MeasuringSection(
        'piston_ring_axial_clearance', 'Piston Ring Axial Clearance', 'Page 18', RING_LIMITS, *RING_VALUES
    ),
    MeasuringSection(
        'valve_unloaded_length', 'Valve Spring Unloaded Length', 'Page 19',
        (
            ('Spring No Rotator Intake', 'spring_no_rotator_intake'),
            ('Spring No Rotator Exhaust', 'spring_no_rotator_exhaust'),
            ('Spring With Rotator Intake', 'spring_with_rotator_intake'),
            ('Spring With Rotator Exhaust', 'spring_with_rotator_exhaust'),
        ),
        *VALVE_VALUES,
    ),
    MeasuringSection(
        'valve_recess', 'Valve Depth from Head Surface (Recess)', 'Page 20',
        (
            ('Intake Min', 'intake_min'),
            ('Intake Max', 'intake_max'),
            ('Exhaust Min', 'exhaust_min'),
            ('Exhaust Max', 'exhaust_max'),
        ),
        *VALVE_VALUES,
    ),
)

PISTON_HEAD_DISTANCE = MeasuringSection(
    'piston_cylinder_head_distance', 'Piston to Cylinder Head Distance', 'Page 23', (),
    ('Cyl', 'Measurement A', 'Measurement B'),
    ('cylinder_no', 'measurement_a', 'measurement_b'),
)

# Single-row tables: (table, ((label, column, is_flag), ...))
MISC_MEASUREMENTS: tuple[tuple[str, tuple[tuple[str, str, bool], ...]], ...] = (
    ('ctmr_crankshaft_end_clearance', (
        ('Crankshaft End Clearance - Spec Min', 'spec_min', False),
        ('Spec Max', 'spec_max', False),
        ('Reading Taken', 'reading_taken', False),
    )),
    ('ctmr_lube_oil_pump_backlash', (
        ('Lube Oil Pump Backlash - Spec Min', 'spec_min', False),
        ('Spec Max', 'spec_max', False),
        ('Reading Taken', 'reading_taken', False),
    )),
    ('ctmr_camshaft_end_clearance', (
        ('Camshaft End Clearance - Spec Min', 'spec_min', False),
        ('Spec Max', 'spec_max', False),
        ('Reading Taken', 'reading_taken', False),
    )),
    ('ctmr_cylinder_head_cap_screw', (
        ('Cyl Head Cap Screw - Spec Min', 'spec_min', False),
        ('Spec Max', 'spec_max', False),
        ('Total', 'total_count', False),
        ('OK', 'ok_count', False),
    )),
    ('ctmr_valve_clearance_setting', (
        ('Valve Clearance - Intake', 'intake_setting', False),
        ('Exhaust', 'exhaust_setting', False),
    )),
    ('ctmr_injection_pump', (
        ('Injection Pump - Timing', 'timing', False),
        ('Brand New', 'is_brand_new', True),
        ('Calibrated', 'is_calibrated', True),
    )),
    ('ctmr_injectors', (
        ('Injectors - Opening Pressure', 'opening_pressure', False),
        ('Brand New', 'is_brand_new', True),
        ('Readjusted', 'is_readjusted', True),
        ('Replace Nozzle Tip', 'is_replace_nozzle_tip', True),
    )),
    ('ctmr_air_cooling_blower', (
        ('Air Cooling Blower - New Ball Bearing', 'is_new_ball_bearing', True),
        ('Repacked Grease', 'is_repacked_grease', True),
        ('Mechanical Blower', 'is_mechanical_blower', True),
        ('Hydraulic Blower', 'is_hydraulic_blower', True),
    )),
)

MEASURING_SELECT = ', '.join(
    ['*']
    + [f'{section.table}(*, {section.data_table}(*))' for section in (*MEASURING_SECTIONS, PISTON_HEAD_DISTANCE)]
    + [f'{table}(*)' for table, _ in MISC_MEASUREMENTS]
)


def _sign_off(meta: Record) -> Element:
    return grid(
        [
            Field('Remarks', meta.get('remarks')),
            Field('Technician', meta.get('technician')),
            Field('Tool No.', meta.get('tool_no')),
            Field('Checked By', meta.get('checked_by')),
        ],
        columns=4,
    )


def _measuring_elements(record: Record, section: MeasuringSection) -> list[Element]:
    meta = first_row(record.get(section.table))
    readings = mapping_rows(meta.get(section.data_table))
    elements: list[Element] = []
    if meta and section.limits:
        elements.append(
            grid([Field(label, meta.get(key)) for label, key in section.limits], columns=len(section.limits))
        )
    if readings:
        rows = tuple(tuple(reading.get(column) for column in section.columns) for reading in readings)
        elements.append(Table(headers=section.headers, rows=rows))
    if meta:
        elements.append(_sign_off(meta))
    return elements


def build_components_teardown_measuring(
    record: Record,
    attachments: Sequence[Record],
    settings: Settings,
) -> list[Element]:
    r = record.get
    elements: list[Element] = [
        letterhead('Components Teardown Measuring Report', settings),
        SectionHeader('Header Information'),
        grid(
            [
                Field('Customer', r('customer')),
                Field('Report Date', format_date(r('report_date'))),
                Field('Engine Model', r('engine_model')),
                Field('Serial No.', r('serial_no')),
                Field('Job Order No.', r('job_order_no')),
            ],
            columns=3,
        ),
    ]
    for section in MEASURING_SECTIONS:
        elements.append(SectionHeader(section.title, section.page))
        elements += _measuring_elements(record, section)

    misc_fields: list[Element] = []
    for table, columns in MISC_MEASUREMENTS:
        data = first_row(r(table))
        if not data:
            continue
        misc_fields.append(
            grid(
                [
                    Field(label, format_boolean(bool(data.get(key))) if flag else data.get(key))
                    for label, key, flag in columns
                ],
                columns=len(columns),
            )
        )
    elements.append(SectionHeader('Miscellaneous Measurements', 'Pages 21-24'))
    elements += misc_fields

    if mapping_rows(first_row(r(PISTON_HEAD_DISTANCE.table)).get(PISTON_HEAD_DISTANCE.data_table)):
        elements.append(SectionHeader(PISTON_HEAD_DISTANCE.title, PISTON_HEAD_DISTANCE.page))
        elements += _measuring_elements(record, PISTON_HEAD_DISTANCE)
    return elements
