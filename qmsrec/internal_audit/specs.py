"""
Internal audit record types.

The audit cycle runs plan -> implementation -> checklist -> nonconformity
-> rectification -> report. Records refer to each other only by free-text
plan names and nonconformity numbers; nothing enforces those links.
"""

from qmsrec.records.specs import (
    FieldDef,
    ModuleSpec,
    SearchField,
    StatDef,
    current_year,
    today_str,
)

PLAN_STATUSES = ["pending", "in progress", "completed", "cancelled"]
IMPLEMENTATION_STATUSES = ["pending review", "under review", "completed"]
CHECK_RESULTS = ["conforming", "nonconforming", "partially conforming", "not applicable"]
NONCONFORMITY_TYPES = ["major", "minor", "observation"]
NONCONFORMITY_STATUSES = ["awaiting rectification", "rectifying", "closed"]
VERIFY_RESULTS = ["passed", "failed", "pending verification"]
RECTIFICATION_STATUSES = ["awaiting", "rectified", "verified"]
REPORT_STATUSES = ["draft", "pending approval", "approved"]


AUDIT_PLAN = ModuleSpec(
    key="internal_audit_plan",
    label="Audit Plan",
    command="plans",
    group="internal_audit",
    title_field="planName",
    fields=[
        FieldDef("planName", "Plan Name", required=True),
        FieldDef("planYear", "Audit Year", required=True, default=current_year),
        FieldDef("auditScope", "Audit Scope", required=True),
        FieldDef("auditBasis", "Audit Basis", required=True),
        FieldDef("plannedDate", "Planned Date", "date", required=True, default=today_str),
        FieldDef("auditLeader", "Lead Auditor", required=True),
        FieldDef("auditMembers", "Audit Team", required=True),
        FieldDef("status", "Status", "select", required=True, options=PLAN_STATUSES),
        FieldDef("remark", "Remark"),
    ],
    search_fields=[
        SearchField("planName", "Plan Name"),
        # typed as free text but matched exactly
        SearchField("planYear", "Audit Year", match="exact"),
        SearchField("status", "Status", "select", options=PLAN_STATUSES),
        SearchField("auditLeader", "Lead Auditor"),
    ],
    list_columns=[
        "id", "planName", "planYear", "plannedDate", "auditLeader", "auditScope", "status",
    ],
    stats=[
        StatDef("Pending", "count_where", "status", ("pending",)),
        StatDef("In Progress", "count_where", "status", ("in progress",)),
        StatDef("Completed", "count_where", "status", ("completed",)),
    ],
    keyword_fields=["planName", "auditScope", "auditLeader", "planYear"],
    export_columns=[
        "planName", "planYear", "auditScope", "auditBasis", "plannedDate",
        "auditLeader", "auditMembers", "status", "remark",
    ],
)


AUDIT_IMPLEMENTATION = ModuleSpec(
    key="internal_audit_implementation",
    label="Audit Implementation",
    command="implementations",
    group="internal_audit",
    title_field="planName",
    fields=[
        FieldDef("planName", "Audit Plan", required=True),
        FieldDef("auditDate", "Audit Date", "date", required=True, default=today_str),
        FieldDef("auditDepartment", "Department", required=True),
        FieldDef("auditClause", "Clause", required=True),
        FieldDef("auditMethod", "Method", required=True),
        FieldDef("auditor", "Auditor", required=True),
        FieldDef("auditee", "Auditee", required=True),
        FieldDef("status", "Status", "select", required=True,
                 options=IMPLEMENTATION_STATUSES),
        FieldDef("remark", "Remark"),
    ],
    search_fields=[
        SearchField("planName", "Audit Plan"),
        SearchField("auditDepartment", "Department"),
        SearchField("status", "Status", "select", options=IMPLEMENTATION_STATUSES),
        SearchField("auditor", "Auditor"),
    ],
    list_columns=[
        "id", "planName", "auditDate", "auditDepartment", "auditClause",
        "auditor", "auditee", "status",
    ],
    stats=[
        StatDef("Total"),
        StatDef("Pending Review", "count_where", "status", ("pending review",)),
        StatDef("Completed", "count_where", "status", ("completed",)),
    ],
    export_columns=[
        "planName", "auditDate", "auditDepartment", "auditClause", "auditMethod",
        "auditor", "auditee", "status",
    ],
)


AUDIT_CHECKLIST = ModuleSpec(
    key="internal_audit_checklist",
    label="Audit Checklist",
    command="checklists",
    group="internal_audit",
    title_field="checklistNo",
    fields=[
        FieldDef("checklistNo", "Checklist No.", required=True),
        FieldDef("auditDate", "Audit Date", "date", required=True, default=today_str),
        FieldDef("auditDepartment", "Department", required=True),
        FieldDef("auditClause", "Clause", required=True),
        FieldDef("checkContent", "Check Content", required=True),
        FieldDef("checkMethod", "Check Method", required=True),
        FieldDef("checkResult", "Result", "select", required=True, options=CHECK_RESULTS),
        FieldDef("auditor", "Auditor", required=True),
        FieldDef("evidence", "Evidence"),
        FieldDef("remark", "Remark"),
    ],
    search_fields=[
        SearchField("checklistNo", "Checklist No."),
        SearchField("auditDepartment", "Department"),
        SearchField("checkResult", "Result", "select", options=CHECK_RESULTS),
        SearchField("auditor", "Auditor"),
    ],
    list_columns=[
        "id", "checklistNo", "auditDate", "auditDepartment", "auditClause",
        "checkResult", "auditor",
    ],
    stats=[
        StatDef("Conforming", "count_where", "checkResult", ("conforming",)),
        StatDef("Nonconforming", "count_where", "checkResult", ("nonconforming",)),
        StatDef("Partially Conforming", "count_where", "checkResult",
                ("partially conforming",)),
    ],
    keyword_fields=["checklistNo", "auditDepartment", "checkContent", "auditClause"],
    export_columns=[
        "checklistNo", "auditDate", "auditDepartment", "auditClause", "checkContent",
        "checkMethod", "checkResult", "auditor", "evidence",
    ],
)


AUDIT_NONCONFORMITY = ModuleSpec(
    key="internal_audit_nonconformity",
    label="Nonconformity",
    command="nonconformities",
    group="internal_audit",
    title_field="nonconformityNo",
    fields=[
        FieldDef("nonconformityNo", "Nonconformity No.", required=True),
        FieldDef("auditDate", "Audit Date", "date", required=True, default=today_str),
        FieldDef("auditDepartment", "Department", required=True),
        FieldDef("auditClause", "Clause", required=True),
        FieldDef("nonconformityType", "Type", "select", required=True,
                 options=NONCONFORMITY_TYPES),
        FieldDef("nonconformityDesc", "Description", required=True),
        FieldDef("correctionRequirement", "Correction Required", required=True),
        FieldDef("responsiblePerson", "Responsible", required=True),
        FieldDef("deadline", "Deadline", "date", required=True),
        FieldDef("auditor", "Auditor", required=True),
        FieldDef("status", "Status", "select", required=True,
                 options=NONCONFORMITY_STATUSES),
        FieldDef("remark", "Remark"),
    ],
    search_fields=[
        SearchField("nonconformityNo", "Nonconformity No."),
        SearchField("auditDepartment", "Department"),
        SearchField("nonconformityType", "Type", "select", options=NONCONFORMITY_TYPES),
        SearchField("status", "Status", "select", options=NONCONFORMITY_STATUSES),
    ],
    list_columns=[
        "id", "nonconformityNo", "auditDate", "auditDepartment", "nonconformityType",
        "responsiblePerson", "deadline", "status",
    ],
    stats=[
        StatDef("Total"),
        StatDef("Major", "count_where", "nonconformityType", ("major",)),
        StatDef("Awaiting Rectification", "count_where", "status",
                ("awaiting rectification",)),
        StatDef("Closed", "count_where", "status", ("closed",)),
    ],
    keyword_fields=["nonconformityNo", "auditDepartment", "nonconformityDesc"],
    export_columns=[
        "nonconformityNo", "auditDate", "auditDepartment", "auditClause",
        "nonconformityType", "nonconformityDesc", "responsiblePerson", "deadline",
        "status",
    ],
)


AUDIT_RECTIFICATION = ModuleSpec(
    key="internal_audit_rectification",
    label="Rectification",
    command="rectifications",
    group="internal_audit",
    title_field="nonconformityNo",
    fields=[
        FieldDef("nonconformityNo", "Nonconformity No.", required=True),
        FieldDef("nonconformityDesc", "Description", required=True),
        FieldDef("responsiblePerson", "Responsible", required=True),
        FieldDef("rectificationMeasure", "Corrective Action", required=True),
        FieldDef("rectificationDate", "Rectified On", "date", required=True),
        FieldDef("verifier", "Verifier", required=True),
        FieldDef("verifyDate", "Verified On", "date"),
        FieldDef("verifyResult", "Verification", "select", required=True,
                 options=VERIFY_RESULTS),
        FieldDef("status", "Status", "select", required=True,
                 options=RECTIFICATION_STATUSES),
        FieldDef("remark", "Remark"),
    ],
    search_fields=[
        SearchField("nonconformityNo", "Nonconformity No."),
        SearchField("responsiblePerson", "Responsible"),
        SearchField("verifyResult", "Verification", "select", options=VERIFY_RESULTS),
        SearchField("status", "Status", "select", options=RECTIFICATION_STATUSES),
    ],
    list_columns=[
        "id", "nonconformityNo", "responsiblePerson", "rectificationDate",
        "verifier", "verifyResult", "status",
    ],
    stats=[
        StatDef("Total"),
        StatDef("Awaiting", "count_where", "status", ("awaiting",)),
        StatDef("Rectified", "count_where", "status", ("rectified",)),
        StatDef("Verified", "count_where", "status", ("verified",)),
    ],
    export_columns=[
        "nonconformityNo", "nonconformityDesc", "responsiblePerson",
        "rectificationMeasure", "rectificationDate", "verifier", "verifyDate",
        "verifyResult", "status",
    ],
)


AUDIT_REPORT = ModuleSpec(
    key="internal_audit_report",
    label="Audit Report",
    command="reports",
    group="internal_audit",
    title_field="reportName",
    fields=[
        FieldDef("reportNo", "Report No.", required=True),
        FieldDef("reportName", "Report Name", required=True),
        FieldDef("auditDate", "Audit Date", "date", required=True, default=today_str),
        FieldDef("auditScope", "Audit Scope", required=True),
        FieldDef("auditBasis", "Audit Basis", required=True),
        FieldDef("auditConclusion", "Conclusion", required=True),
        FieldDef("nonconformityCount", "Nonconformities", "int", required=True, default=0),
        FieldDef("observationCount", "Observations", "int", required=True, default=0),
        FieldDef("auditLeader", "Lead Auditor", required=True),
        FieldDef("approver", "Approver", required=True),
        FieldDef("approveDate", "Approved On", "date"),
        FieldDef("status", "Status", "select", required=True, options=REPORT_STATUSES),
        FieldDef("remark", "Remark"),
    ],
    search_fields=[
        SearchField("reportNo", "Report No."),
        SearchField("reportName", "Report Name"),
        SearchField("status", "Status", "select", options=REPORT_STATUSES),
        SearchField("auditLeader", "Lead Auditor"),
    ],
    list_columns=[
        "id", "reportNo", "reportName", "auditDate", "nonconformityCount",
        "observationCount", "auditLeader", "status",
    ],
    stats=[
        StatDef("Total"),
        StatDef("Pending Approval", "count_where", "status", ("pending approval",)),
        StatDef("Approved", "count_where", "status", ("approved",)),
    ],
    keyword_fields=["reportNo", "reportName", "auditLeader"],
    export_columns=[
        "reportNo", "reportName", "auditDate", "auditScope", "auditConclusion",
        "nonconformityCount", "observationCount", "auditLeader", "approver", "status",
    ],
)

MODULES = [
    AUDIT_PLAN,
    AUDIT_IMPLEMENTATION,
    AUDIT_CHECKLIST,
    AUDIT_NONCONFORMITY,
    AUDIT_RECTIFICATION,
    AUDIT_REPORT,
]
