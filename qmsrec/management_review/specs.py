"""
Management review record types.

The review cycle runs annual plan -> implementation plan -> input
materials -> meeting -> report.
"""

from qmsrec.records.specs import (
    FieldDef,
    ModuleSpec,
    SearchField,
    StatDef,
    today_str,
)

PLAN_STATUSES = ["pending", "in progress", "completed", "cancelled"]
IMPLEMENTATION_STATUSES = ["pending review", "under review", "completed"]
MATERIAL_TYPES = [
    "audit results", "customer feedback", "corrective action",
    "improvement suggestion", "resource needs", "risk assessment", "other",
]
INPUT_STATUSES = ["pending submission", "submitted", "adopted"]
REPORT_STATUSES = ["draft", "pending approval", "approved"]

ANNUAL_PLAN = ModuleSpec(
    key="management_review_annual_plan",
    label="Annual Review Plan",
    command="plans",
    group="management_review",
    title_field="planName",
    fields=[
        FieldDef("planName", "Plan Name", required=True),
        FieldDef("planYear", "Year", required=True),
        FieldDef("reviewObjective", "Objective", required=True),
        FieldDef("reviewScope", "Scope", required=True),
        FieldDef("plannedDate", "Planned Date", "date", required=True),
        FieldDef("organizer", "Organizer", required=True),
        FieldDef("participants", "Participants", required=True),
        FieldDef("status", "Status", "select", required=True, options=PLAN_STATUSES),
        FieldDef("remark", "Remark"),
    ],
    search_fields=[
        SearchField("planName", "Plan Name"),
        SearchField("planYear", "Year", match="exact"),
        SearchField("status", "Status", "select", options=PLAN_STATUSES),
    ],
    list_columns=[
        "id", "planName", "planYear", "plannedDate", "organizer", "status",
    ],
    stats=[
        StatDef("Total Plans"),
        StatDef("Pending", "count_where", "status", ("pending",)),
        StatDef("In Progress", "count_where", "status", ("in progress",)),
        StatDef("Completed", "count_where", "status", ("completed",)),
    ],
)


REVIEW_IMPLEMENTATION = ModuleSpec(
    key="management_review_implementation",
    label="Review Implementation Plan",
    command="implementations",
    group="management_review",
    title_field="planName",
    fields=[
        FieldDef("planName", "Plan Name", required=True),
        FieldDef("reviewDate", "Review Date", "date", required=True, default=today_str),
        FieldDef("reviewLocation", "Location", required=True),
        FieldDef("chairperson", "Chair", required=True),
        FieldDef("participants", "Participants", required=True),
        FieldDef("reviewItems", "Review Items", required=True),
        FieldDef("preparationRequirements", "Preparation", required=True),
        FieldDef("status", "Status", "select", required=True,
                 options=IMPLEMENTATION_STATUSES),
        FieldDef("remark", "Remark"),
    ],
    search_fields=[
        SearchField("planName", "Plan Name"),
        SearchField("chairperson", "Chair"),
        SearchField("status", "Status", "select", options=IMPLEMENTATION_STATUSES),
    ],
    list_columns=[
        "id", "planName", "reviewDate", "reviewLocation", "chairperson", "status",
    ],
    stats=[
        StatDef("Total Plans"),
        StatDef("Pending Review", "count_where", "status", ("pending review",)),
        StatDef("Completed", "count_where", "status", ("completed",)),
    ],
)


REVIEW_INPUT = ModuleSpec(
    key="management_review_input",
    label="Review Input Material",
    command="inputs",
    group="management_review",
    title_field="materialName",
    fields=[
        FieldDef("materialName", "Material", required=True),
        FieldDef("materialType", "Type", "select", required=True, options=MATERIAL_TYPES),
        FieldDef("submitDate", "Submitted", "date", required=True, default=today_str),
        FieldDef("submitter", "Submitter", required=True),
        FieldDef("department", "Department", required=True),
        FieldDef("materialContent", "Content", required=True),
        FieldDef("status", "Status", "select", required=True, options=INPUT_STATUSES),
        FieldDef("remark", "Remark"),
    ],
    search_fields=[
        SearchField("materialName", "Material"),
        SearchField("materialType", "Type", "select", options=MATERIAL_TYPES),
        SearchField("department", "Department"),
        SearchField("status", "Status", "select", options=INPUT_STATUSES),
    ],
    list_columns=[
        "id", "materialName", "materialType", "submitDate", "submitter",
        "department", "status",
    ],
    stats=[
        StatDef("Total Materials"),
        StatDef("Pending Submission", "count_where", "status", ("pending submission",)),
        StatDef("Submitted", "count_where", "status", ("submitted",)),
        StatDef("Adopted", "count_where", "status", ("adopted",)),
    ],
)


REVIEW_MEETING = ModuleSpec(
    key="management_review_meeting",
    label="Review Meeting",
    command="meetings",
    group="management_review",
    title_field="meetingNo",
    fields=[
        FieldDef("meetingNo", "Meeting No.", required=True),
        FieldDef("meetingDate", "Meeting Date", "date", required=True, default=today_str),
        FieldDef("meetingLocation", "Location", required=True),
        FieldDef("chairperson", "Chair", required=True),
        FieldDef("attendees", "Attendees", required=True),
        FieldDef("meetingContent", "Content", required=True),
        FieldDef("decisions", "Decisions", required=True),
        FieldDef("actionItems", "Action Items", required=True),
        FieldDef("recorder", "Recorder", required=True),
        FieldDef("remark", "Remark"),
    ],
    search_fields=[
        SearchField("meetingNo", "Meeting No."),
        SearchField("chairperson", "Chair"),
        SearchField("recorder", "Recorder"),
    ],
    list_columns=[
        "id", "meetingNo", "meetingDate", "meetingLocation", "chairperson", "recorder",
    ],
    stats=[
        StatDef("Total Meetings"),
        StatDef("This Month", "count_month", "meetingDate"),
    ],
)


REVIEW_REPORT = ModuleSpec(
    key="management_review_report",
    label="Review Report",
    command="reports",
    group="management_review",
    title_field="reportName",
    fields=[
        FieldDef("reportNo", "Report No.", required=True),
        FieldDef("reportName", "Report Name", required=True),
        FieldDef("reviewDate", "Review Date", "date", required=True, default=today_str),
        FieldDef("reviewConclusion", "Conclusion", required=True),
        FieldDef("improvementMeasures", "Improvements", required=True),
        FieldDef("resourceRequirements", "Resource Needs", required=True),
        FieldDef("responsiblePerson", "Responsible", required=True),
        FieldDef("completionDate", "Completion Date", "date", required=True),
        FieldDef("approver", "Approver", required=True),
        FieldDef("approveDate", "Approval Date", "date"),
        FieldDef("status", "Status", "select", required=True, options=REPORT_STATUSES),
        FieldDef("remark", "Remark"),
    ],
    search_fields=[
        SearchField("reportNo", "Report No."),
        SearchField("reportName", "Report Name"),
        SearchField("status", "Status", "select", options=REPORT_STATUSES),
    ],
    list_columns=[
        "id", "reportNo", "reportName", "reviewDate", "responsiblePerson",
        "approver", "status",
    ],
    stats=[
        StatDef("Total Reports"),
        StatDef("Pending Approval", "count_where", "status", ("pending approval",)),
        StatDef("Approved", "count_where", "status", ("approved",)),
    ],
)

MODULES = [
    ANNUAL_PLAN,
    REVIEW_IMPLEMENTATION,
    REVIEW_INPUT,
    REVIEW_MEETING,
    REVIEW_REPORT,
]
