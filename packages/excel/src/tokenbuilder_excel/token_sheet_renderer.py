"""Token design workbook renderer."""

from __future__ import annotations

import logging
from typing import Dict, List

import pandas as pd
from openpyxl import Workbook
from openpyxl.cell.cell import Cell
from openpyxl.styles import Font, Border, Side, Alignment, PatternFill
from openpyxl.utils.cell import absolute_coordinate
from openpyxl.worksheet.worksheet import Worksheet

from tokenbuilder_domain.blocks import (
    BlockContext,
    BlockExecutor,
    ContractDraftBlock,
    TrancheScheduleBlock,
)
from tokenbuilder_domain.contracts import FragmentComposer, build_registry
from tokenbuilder_domain.schemas import (
    BLOCK_CATEGORIES,
    TOKEN_STANDARDS,
    ContractDraft,
    TokenSpecification,
    TokenWorkbookCFG,
)

logger = logging.getLogger(__name__)


class TokenSheetRenderer:
    """Render a token design, its contract draft and fragment annotations.

    Cell references of the key inputs and formulas on the design sheet are
    kept in ``cells`` after build_workbook() (e.g. ``cells["total_supply"]``).
    """

    def __init__(self, config: TokenWorkbookCFG):
        self.config = config

        self.blue_font = Font(color="0000FF")  # Blue for input values
        self.bold_font = Font(bold=True)

        self.header_font = Font(bold=True, color="FFFFFF")
        self.header_fill = PatternFill(start_color="1F4E78", end_color="1F4E78", fill_type="solid")

        self.section_header_font = Font(italic=True, bold=True)
        self.section_header_fill = PatternFill(start_color="E7E6E6", end_color="E7E6E6", fill_type="solid")

        self.warning_font = Font(bold=True, color="C00000")
        self.code_font = Font(name="Consolas", size=10)

        self.thin_border = Border(
            left=Side(style='thin'),
            right=Side(style='thin'),
            top=Side(style='thin'),
            bottom=Side(style='thin')
        )
        self.top_border = Border(top=Side(style='medium'))

        self.center_align = Alignment(horizontal='center', vertical='center')
        self.right_align = Alignment(horizontal='right')

        self.cells: Dict[str, str] = {}

    def render(self, output_path: str) -> str:
        wb = self.build_workbook()
        wb.save(output_path)
        return output_path

    def build_workbook(self) -> Workbook:
        """Build the workbook in memory.

        Raises:
            UnsupportedStandardKind: If the specification's standard is unknown
            DuplicateTrancheIdError: If tranche ids collide on a slot standard
        """
        spec = self.config.spec
        context = self._run_blocks(spec)
        draft: ContractDraft = context.get("contract_draft")

        wb = Workbook()
        wb.remove(wb.active)
        self.cells = {}

        self._render_design_sheet(
            wb,
            spec,
            draft,
            context.get("tranche_schedule"),
        )
        if self.config.include_contract_sheet:
            self._render_contract_sheet(wb, draft)
        if self.config.include_fragments_sheet:
            self._render_fragments_sheet(wb, context.get("draft_fragments"))

        logger.info(f"Built workbook for '{spec.name}' with sheets {wb.sheetnames}")
        return wb

    def _run_blocks(self, spec: TokenSpecification) -> BlockContext:
        composer = FragmentComposer(registry=build_registry(self.config.generator))
        context = BlockContext()
        context.set("token_specification", spec)
        BlockExecutor([ContractDraftBlock(composer=composer), TrancheScheduleBlock()]).execute(context)
        return context

    # ------------------------------------------------------------------ #
    # Token Design sheet
    # ------------------------------------------------------------------ #

    def _render_design_sheet(
        self,
        wb: Workbook,
        spec: TokenSpecification,
        draft: ContractDraft,
        schedule: pd.DataFrame,
    ) -> None:
        sheet = wb.create_sheet(title=self.config.design_sheet_title)
        sheet.sheet_view.showGridLines = False

        title_cell = sheet["A1"]
        title_cell.value = f"Token Design - {spec.name or 'Untitled'}"
        title_cell.font = Font(size=14, bold=True)

        row = self._write_section_header(sheet, 3, "Overview", width=2)
        row = self._write_overview(sheet, row, spec)

        row = self._write_section_header(sheet, row + 1, "Building Blocks", width=2)
        row = self._write_blocks(sheet, row, spec)

        row = self._write_section_header(sheet, row + 1, "Tranches", width=6)
        row = self._write_tranches(sheet, row, schedule)

        if draft.warnings:
            row = self._write_section_header(sheet, row + 1, "Warnings", width=2)
            for warning in draft.warnings:
                sheet.cell(row=row, column=1, value=warning.code).font = self.warning_font
                self._write_text(sheet, row, 2, warning.message)
                row += 1

        sheet.column_dimensions["A"].width = 24
        sheet.column_dimensions["B"].width = 36
        for col_letter in ("C", "D", "E", "F"):
            sheet.column_dimensions[col_letter].width = 16
        sheet.freeze_panes = "A3"

    def _write_section_header(self, sheet: Worksheet, row: int, label: str, width: int) -> int:
        for col in range(1, width + 1):
            cell = sheet.cell(row=row, column=col)
            cell.fill = self.section_header_fill
        header = sheet.cell(row=row, column=1, value=label)
        header.font = self.section_header_font
        return row + 1

    def _write_overview(self, sheet: Worksheet, row: int, spec: TokenSpecification) -> int:
        metadata = spec.metadata
        offset_days = self.config.generator.default_maturity_offset_seconds // 86_400

        items = [
            ("name", "Name", spec.name, None),
            ("symbol", "Symbol", spec.symbol, None),
            ("standard", "Standard", TOKEN_STANDARDS.get(spec.standard, spec.standard), None),
            ("decimals", "Decimals", spec.decimals, '0'),
            ("total_supply", "Total Supply", spec.total_supply, '#,##0'),
            ("issuance_date", "Issuance Date", metadata.issuance_date or "At deployment", 'yyyy-mm-dd'),
            ("maturity_date", "Maturity Date", metadata.maturity_date or f"Deployment + {offset_days} days", 'yyyy-mm-dd'),
            ("whitelist_enabled", "Whitelist", "Enabled" if metadata.whitelist_enabled else "Disabled", None),
            ("jurisdictions", "Restricted Jurisdictions", ", ".join(metadata.jurisdiction_restrictions) or "None", None),
            ("conversion_rate", "Conversion Rate", metadata.conversion_rate or self.config.generator.default_conversion_rate, '#,##0'),
        ]

        for key, label, value, number_format in items:
            sheet.cell(row=row, column=1, value=label).font = self.bold_font
            value_cell = self._write_text(sheet, row, 2, value)
            value_cell.font = self.blue_font
            value_cell.alignment = self.right_align
            if number_format and not isinstance(value, str):
                value_cell.number_format = number_format
            self.cells[key] = value_cell.coordinate
            row += 1
        return row

    def _write_blocks(self, sheet: Worksheet, row: int, spec: TokenSpecification) -> int:
        self._write_table_header(sheet, row, ["Category", "Block"])
        row += 1
        for category in BLOCK_CATEGORIES:
            for name in spec.blocks.names(category):
                sheet.cell(row=row, column=1, value=category.title())
                self._write_text(sheet, row, 2, name).font = self.blue_font
                row += 1
        if spec.blocks.is_empty():
            sheet.cell(row=row, column=1, value="No building blocks selected").font = Font(italic=True)
            row += 1
        return row

    def _write_tranches(self, sheet: Worksheet, row: int, schedule: pd.DataFrame) -> int:
        """Tranche table with live total and supply check formulas.

        Share of supply, the tranche total, the difference and the check
        are formulas against the Total Supply input cell, so edits in the
        workbook recompute.
        """
        supply_ref = absolute_coordinate(self.cells["total_supply"])

        self._write_table_header(
            sheet, row, ["Slot ID", "Name", "Value", "Rate (bps)", "Rate (%)", "Share of Supply"]
        )
        row += 1

        if schedule.empty:
            sheet.cell(row=row, column=1, value="No tranches defined").font = Font(italic=True)
            return row + 1

        first_row = row
        for tranche in schedule.itertuples(index=False):
            sheet.cell(row=row, column=1, value=int(tranche.slot_id)).alignment = self.center_align
            self._write_text(sheet, row, 2, tranche.name).font = self.blue_font

            value_cell = sheet.cell(row=row, column=3, value=int(tranche.value))
            value_cell.font = self.blue_font
            value_cell.number_format = '#,##0'

            bps_cell = sheet.cell(row=row, column=4, value=int(tranche.interest_rate_bps))
            bps_cell.font = self.blue_font
            bps_cell.number_format = '0'

            pct_cell = sheet.cell(row=row, column=5, value=f"=D{row}/10000")
            pct_cell.number_format = '0.00%'

            share_cell = sheet.cell(row=row, column=6, value=f"=IF({supply_ref}=0,0,C{row}/{supply_ref})")
            share_cell.number_format = '0.0%'

            for col in range(1, 7):
                sheet.cell(row=row, column=col).border = self.thin_border
            row += 1
        last_row = row - 1

        total_row = row
        sheet.cell(row=total_row, column=2, value="Total").font = self.bold_font
        total_cell = sheet.cell(row=total_row, column=3, value=f"=SUM(C{first_row}:C{last_row})")
        total_cell.font = self.bold_font
        total_cell.number_format = '#,##0'
        share_total = sheet.cell(row=total_row, column=6, value=f"=SUM(F{first_row}:F{last_row})")
        share_total.number_format = '0.0%'
        for col in range(1, 7):
            sheet.cell(row=total_row, column=col).border = self.top_border
        self.cells["tranche_total"] = total_cell.coordinate

        difference_row = total_row + 1
        sheet.cell(row=difference_row, column=2, value="Difference vs Supply")
        difference_cell = sheet.cell(row=difference_row, column=3, value=f"=C{total_row}-{supply_ref}")
        difference_cell.number_format = '#,##0;[Red]-#,##0'
        self.cells["tranche_difference"] = difference_cell.coordinate

        check_row = difference_row + 1
        sheet.cell(row=check_row, column=2, value="Supply Check")
        check_cell = sheet.cell(row=check_row, column=3, value=f'=IF(C{total_row}={supply_ref},"OK","MISMATCH")')
        check_cell.font = self.bold_font
        check_cell.alignment = self.center_align
        self.cells["tranche_check"] = check_cell.coordinate

        return check_row + 1

    def _write_text(self, sheet: Worksheet, row: int, column: int, value) -> Cell:
        """Write a value, keeping user text that starts with "=" as a literal string."""
        cell = sheet.cell(row=row, column=column, value=value)
        if isinstance(value, str) and value.startswith("="):
            cell.data_type = "s"
        return cell

    def _write_table_header(self, sheet: Worksheet, row: int, labels: List[str]) -> None:
        for col, label in enumerate(labels, start=1):
            cell = sheet.cell(row=row, column=col, value=label)
            cell.font = self.header_font
            cell.fill = self.header_fill
            cell.alignment = self.center_align

    # ------------------------------------------------------------------ #
    # Contract and Fragments sheets
    # ------------------------------------------------------------------ #

    def _render_contract_sheet(self, wb: Workbook, draft: ContractDraft) -> None:
        sheet = wb.create_sheet(title="Contract")
        sheet.sheet_view.showGridLines = False
        self._write_table_header(sheet, 1, ["Line", "Source"])

        for line_number, line in enumerate(draft.full_text.splitlines(), start=1):
            sheet.cell(row=line_number + 1, column=1, value=line_number).alignment = self.right_align
            source_cell = self._write_text(sheet, line_number + 1, 2, line)
            source_cell.font = self.code_font

        sheet.column_dimensions["A"].width = 6
        sheet.column_dimensions["B"].width = 110
        sheet.freeze_panes = "A2"

    def _render_fragments_sheet(self, wb: Workbook, fragments: pd.DataFrame) -> None:
        sheet = wb.create_sheet(title="Fragments")
        sheet.sheet_view.showGridLines = False
        self._write_table_header(sheet, 1, ["Position", "Fragment", "Category", "Triggers", "Lines"])

        for offset, fragment in enumerate(fragments.itertuples(index=False), start=2):
            sheet.cell(row=offset, column=1, value=int(fragment.position)).alignment = self.center_align
            sheet.cell(row=offset, column=2, value=fragment.fragment_id)
            sheet.cell(row=offset, column=3, value=fragment.category.title())
            self._write_text(sheet, offset, 4, fragment.triggers)
            sheet.cell(row=offset, column=5, value=int(fragment.line_count))

        for col_letter, width in (("A", 10), ("B", 28), ("C", 14), ("D", 48), ("E", 8)):
            sheet.column_dimensions[col_letter].width = width
        sheet.freeze_panes = "A2"
