"""Customer service record types: satisfaction surveys and complaints."""

from qmsrec.records.specs import (
    FieldDef,
    ModuleSpec,
    SearchField,
    StatDef,
    today_str,
)

SURVEY_METHODS = ["phone", "on-site", "online", "email"]
EVALUATIONS = ["very satisfied", "satisfied", "neutral", "dissatisfied"]

COMPLAINT_TYPES = ["service attitude", "test quality", "test efficiency", "fees", "other"]
HANDLE_STATUSES = ["pending", "processing", "resolved"]


SATISFACTION_SURVEY = ModuleSpec(
    key="satisfaction_survey",
    label="Satisfaction Survey",
    command="surveys",
    group="customer_service",
    title_field="customerName",
    fields=[
        FieldDef("surveyDate", "Survey Date", "date", required=True, default=today_str),
        FieldDef("customerName", "Customer", required=True),
        FieldDef("contactPhone", "Contact Phone", required=True),
        FieldDef("surveyMethod", "Survey Method", "select", required=True,
                 options=SURVEY_METHODS),
        FieldDef("satisfactionScore", "Satisfaction Score", "rating", required=True,
                 default=5),
        FieldDef("serviceAttitude", "Service Attitude", "rating", required=True),
        FieldDef("serviceEfficiency", "Service Efficiency", "rating", required=True),
        FieldDef("serviceQuality", "Service Quality", "rating", required=True),
        FieldDef("overallEvaluation", "Overall Evaluation", "select", required=True,
                 options=EVALUATIONS),
        FieldDef("suggestions", "Suggestions"),
        FieldDef("surveyPerson", "Surveyed By", required=True),
        FieldDef("remark", "Remark"),
    ],
    search_fields=[
        SearchField("surveyDate", "Survey Date", "dateRange"),
        SearchField("customerName", "Customer"),
        SearchField("contactPhone", "Contact Phone"),
        SearchField("surveyMethod", "Survey Method", "select", options=SURVEY_METHODS),
        SearchField("surveyPerson", "Surveyed By"),
    ],
    list_columns=[
        "id", "surveyDate", "customerName", "contactPhone", "surveyMethod",
        "satisfactionScore", "overallEvaluation", "surveyPerson",
    ],
    stats=[
        StatDef("Total Surveys"),
        StatDef("Satisfied", "count_where", "overallEvaluation",
                ("very satisfied", "satisfied")),
        StatDef("Dissatisfied", "count_where", "overallEvaluation", ("dissatisfied",)),
        StatDef("Average Score", "average", "satisfactionScore", precision=1),
    ],
)


COMPLAINT_RECORD = ModuleSpec(
    key="complaint_record",
    label="Complaint Record",
    command="complaints",
    group="customer_service",
    title_field="customerName",
    fields=[
        FieldDef("complaintDate", "Complaint Date", "date", required=True),
        FieldDef("customerName", "Customer", required=True),
        FieldDef("contactPerson", "Contact Person"),
        FieldDef("contactPhone", "Contact Phone", required=True),
        FieldDef("complaintType", "Complaint Type", "select", required=True,
                 options=COMPLAINT_TYPES),
        FieldDef("complaintContent", "Complaint", required=True),
        FieldDef("handleStatus", "Status", "select", required=True,
                 options=HANDLE_STATUSES),
        FieldDef("handler", "Handler"),
        FieldDef("handleDate", "Handled On", "date"),
        FieldDef("handleResult", "Resolution"),
        FieldDef("remark", "Remark"),
    ],
    search_fields=[
        SearchField("complaintDate", "Complaint Date", "dateRange"),
        SearchField("customerName", "Customer"),
        SearchField("complaintType", "Complaint Type", "select", options=COMPLAINT_TYPES),
        SearchField("handleStatus", "Status", "select", options=HANDLE_STATUSES),
        SearchField("handler", "Handler"),
    ],
    list_columns=[
        "id", "complaintDate", "customerName", "complaintType",
        "complaintContent", "handleStatus", "handler",
    ],
    stats=[
        StatDef("Total Complaints"),
        StatDef("Pending", "count_where", "handleStatus", ("pending",)),
        StatDef("Processing", "count_where", "handleStatus", ("processing",)),
        StatDef("Resolved", "count_where", "handleStatus", ("resolved",)),
    ],
)

MODULES = [SATISFACTION_SURVEY, COMPLAINT_RECORD]
