from enum import Enum


class Tab(str, Enum):
    ORGANIZATION = "organization"
    USE_CASES = "use_cases"
    RESULTS = "results"


class OrganizationField(str, Enum):
    COMPANY_NAME = "company_name"
    BUSINESS_SECTOR = "business_sector"
    IT_EMPLOYEE_COST = "it_employee_cost"


class UseCaseField(str, Enum):
    SELECTED = "selected"
    FTES = "ftes"
    HOURS_PER_DAY = "hours_per_day"
