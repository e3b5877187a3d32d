"""
classplan - weekly class scheduling with professor/classroom conflict checks.
"""
