from .table_template import render_table
