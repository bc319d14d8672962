from typing import Dict, List, Optional, Sequence, Tuple
from fastapi.responses import StreamingResponse
from io import BytesIO, StringIO
import pandas as pd

from shared.core.schemas import ExportResponse

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

# (title, rows); a title of None writes the rows without a heading line
Section = Tuple[Optional[str], List[Dict]]


def export_to_excel(
    data: List[Dict],
    filename: str = "export.xlsx",
    column_map: Dict[str, str] | None = None,
) -> ExportResponse:
    """
    Shape rows for a client-side spreadsheet export.

    Args:
        data: List of dictionaries (each dict = row)
        filename: Name the client should save the file as
        column_map: Mapping of data keys -> friendly column names
    """
    if not data:
        return ExportResponse(filename=filename, data=[])

    # Fill missing keys to avoid KeyError
    if column_map:
        for row in data:
            for key in column_map.keys():
                row.setdefault(key, None)

    df = pd.DataFrame(data)

    # Rename columns if mapping provided
    if column_map:
        df = df[list(column_map.keys())].rename(columns=column_map)

    # NaN is not valid JSON
    df = df.astype(object).where(pd.notnull(df), None)
    return ExportResponse(filename=filename, data=df.to_dict(orient="records"))


def attachment_headers(filename: str) -> Dict[str, str]:
    return {"Content-Disposition": f'attachment; filename="{filename}"'}


def sections_to_csv(sections: Sequence[Section], title: Optional[str] = None) -> str:
    output = StringIO()
    if title:
        output.write(f"{title}\n")

    for i, (heading, rows) in enumerate(sections):
        if i or title:
            output.write("\n")
        if heading:
            output.write(f"{heading}\n")
        if rows:
            pd.DataFrame(rows, dtype=object).to_csv(output, index=False, lineterminator="\n")

    return output.getvalue()


def csv_response(content: str, filename: str) -> StreamingResponse:
    return StreamingResponse(
        iter([content.encode("utf-8")]),
        media_type="text/csv; charset=utf-8",
        headers=attachment_headers(filename)
    )


def sections_to_xlsx(sections: Sequence[Section]) -> BytesIO:
    output = BytesIO()
    with pd.ExcelWriter(output, engine="openpyxl") as writer:
        start_row = 0
        for heading, rows in sections:
            if heading:
                pd.DataFrame([[heading]]).to_excel(
                    writer, sheet_name="Analytics", index=False, header=False, startrow=start_row)
                start_row += 1
            df = pd.DataFrame(rows, dtype=object)
            df.to_excel(writer, sheet_name="Analytics", index=False, startrow=start_row)
            # header + rows + one blank line
            start_row += len(df) + 2

    output.seek(0)
    return output


def xlsx_response(output: BytesIO, filename: str) -> StreamingResponse:
    return StreamingResponse(
        output,
        media_type=XLSX_MEDIA_TYPE,
        headers=attachment_headers(filename)
    )
