"""Equipment record types: device maintenance and environment monitoring."""

from qmsrec.records.specs import FieldDef, ModuleSpec, SearchField, StatDef, today_str

MAINTENANCE_TYPES = ["routine care", "periodic maintenance", "fault repair", "calibration"]
MAINTENANCE_RESULTS = ["normal", "follow-up", "incomplete"]

MONITOR_RESULTS = ["normal", "abnormal"]


DEVICE_MAINTENANCE = ModuleSpec(
    key="device_maintenance",
    label="Device Maintenance",
    command="maintenance",
    group="equipment",
    title_field="deviceName",
    fields=[
        FieldDef("maintenanceDate", "Maintenance Date", "date", required=True,
                 default=today_str),
        FieldDef("deviceName", "Device", required=True),
        FieldDef("deviceNo", "Device No.", required=True),
        FieldDef("maintenanceType", "Maintenance Type", "select", required=True,
                 options=MAINTENANCE_TYPES),
        FieldDef("maintenanceContent", "Work Performed", required=True),
        FieldDef("maintenanceResult", "Result", "select", required=True,
                 options=MAINTENANCE_RESULTS),
        FieldDef("maintenancePerson", "Performed By", required=True),
        FieldDef("remark", "Remark"),
    ],
    search_fields=[
        SearchField("maintenanceDate", "Maintenance Date", "dateRange"),
        SearchField("deviceName", "Device"),
        SearchField("deviceNo", "Device No."),
        SearchField("maintenanceType", "Maintenance Type", "select",
                    options=MAINTENANCE_TYPES),
        SearchField("maintenancePerson", "Performed By"),
    ],
    list_columns=[
        "id", "maintenanceDate", "deviceName", "deviceNo", "maintenanceType",
        "maintenanceResult", "maintenancePerson",
    ],
    stats=[
        StatDef("Total Records"),
        StatDef("Normal", "count_where", "maintenanceResult", ("normal",)),
        StatDef("Fault Repairs", "count_where", "maintenanceType", ("fault repair",)),
        StatDef("Today", "count_today", "maintenanceDate"),
    ],
)


ENVIRONMENT_MONITOR = ModuleSpec(
    key="environment_monitor",
    label="Environment Monitoring",
    command="environment",
    group="equipment",
    title_field="monitorItem",
    fields=[
        FieldDef("monitorDate", "Monitor Date", "date", required=True, default=today_str),
        FieldDef("monitorItem", "Item", required=True),
        FieldDef("monitorLocation", "Location", required=True),
        FieldDef("standardValue", "Standard Value", required=True),
        FieldDef("actualValue", "Actual Value", required=True),
        FieldDef("result", "Result", "select", required=True, options=MONITOR_RESULTS),
        FieldDef("monitor", "Monitored By", required=True),
        FieldDef("remark", "Remark"),
    ],
    search_fields=[
        SearchField("monitorDate", "Monitor Date", "dateRange"),
        SearchField("monitorItem", "Item"),
        SearchField("monitorLocation", "Location"),
        SearchField("monitor", "Monitored By"),
        SearchField("result", "Result", "select", options=MONITOR_RESULTS),
    ],
    list_columns=[
        "id", "monitorDate", "monitorItem", "monitorLocation", "standardValue",
        "actualValue", "result", "monitor",
    ],
    stats=[
        StatDef("Total Records"),
        StatDef("Normal", "count_where", "result", ("normal",)),
        StatDef("Abnormal", "count_where", "result", ("abnormal",)),
        StatDef("Today", "count_today", "monitorDate"),
    ],
)

MODULES = [DEVICE_MAINTENANCE, ENVIRONMENT_MONITOR]
