"""timecalc package.

Pure time-calculation engine organized by feature modules (bookings, rules,
breaks, daily, monthly, vacation). Entry points live in ``timecalc.api``;
``timecalc.container`` wires the calculators for an orchestration layer.
"""
