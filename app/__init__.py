"""FlowSense: workflow flow rules, TAT due dates and flow path analysis."""
