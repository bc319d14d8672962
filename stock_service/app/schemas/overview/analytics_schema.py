from datetime import date
from typing import Optional
from pydantic import model_validator

from shared.core.schemas import CamelModel
from ...enum.report_enum import ExportFormat, ReportFormat


class AnalyticsExportRequest(CamelModel):
    format: ExportFormat = ExportFormat.csv


class ReportRequest(CamelModel):
    format: ReportFormat = ReportFormat.pdf
    start_date: Optional[date] = None
    end_date: Optional[date] = None

    @model_validator(mode="after")
    def check_range(self):
        if self.start_date and self.end_date and self.start_date > self.end_date:
            raise ValueError("startDate must be on or before endDate")
        return self
