# Report generation (HTML, Excel and Word)
from .report_generator import ReportGenerator, generate_report, safe_filename
from .excel_export import build_excel_report
from .word_export import build_word_report
