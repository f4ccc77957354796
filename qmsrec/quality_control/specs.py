"""Quality control record types."""

from qmsrec.records.specs import FieldDef, ModuleSpec, SearchField, StatDef, today_str

REVIEW_RESULTS = ["passed", "failed", "needs revision"]

CONTRACT_REVIEW = ModuleSpec(
    key="contract_review",
    label="Contract Review",
    command="contracts",
    group="quality_control",
    title_field="contractNo",
    fields=[
        FieldDef("reviewDate", "Review Date", "date", required=True, default=today_str),
        FieldDef("contractNo", "Contract No.", required=True),
        FieldDef("customerName", "Customer", required=True),
        FieldDef("testItems", "Test Items", required=True),
        FieldDef("reviewContent", "Review Content", required=True),
        FieldDef("reviewResult", "Result", "select", required=True, options=REVIEW_RESULTS),
        FieldDef("reviewer", "Reviewer", required=True),
        FieldDef("remark", "Remark"),
    ],
    search_fields=[
        SearchField("reviewDate", "Review Date", "dateRange"),
        SearchField("contractNo", "Contract No."),
        SearchField("customerName", "Customer"),
        SearchField("reviewResult", "Result", "select", options=REVIEW_RESULTS),
        SearchField("reviewer", "Reviewer"),
    ],
    list_columns=[
        "id", "reviewDate", "contractNo", "customerName", "testItems",
        "reviewResult", "reviewer",
    ],
    stats=[
        StatDef("Total Reviews"),
        StatDef("Passed", "count_where", "reviewResult", ("passed",)),
        StatDef("Needs Revision", "count_where", "reviewResult", ("needs revision",)),
    ],
)

MODULES = [CONTRACT_REVIEW]
