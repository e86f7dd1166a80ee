# Synthetic monthly payments table used as sample data for tabular-verb lessons.

from payment_data.config import Config
from payment_data.generator import InvalidArgument, assemble_dataset, generate, month_starts
