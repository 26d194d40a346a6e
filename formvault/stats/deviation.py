"""
Deviation measures that are declared but not yet defined.
"""


class Deviation:

    @staticmethod
    def absolute_deviation(value, sample):
        """Absolute deviation of value relative to sample.

        Whether this means deviation from the mean, from the median, or the
        mean absolute deviation of the whole sample has not been decided.
        """
        raise NotImplementedError("absolute_deviation has no agreed formula yet")
