"""Performance profiler for conversions."""

import time
import psutil
import logging
from typing import Dict, Any, Optional, List
from dataclasses import dataclass


@dataclass
class ConversionMetrics:
    """Performance metrics for one conversion."""
    operation_name: str
    start_time: float
    end_time: float
    duration: float
    input_size: int
    output_size: int
    memory_peak_mb: float
    memory_start_mb: float
    memory_end_mb: float
    throughput_mbps: float
    events_processed: int
    diagnostics_reported: int


class ConversionProfiler:
    """
    Measures duration, memory and throughput of conversions.

    Memory figures are the resident set size of the current process.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the profiler.

        Args:
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)
        self.metrics_history: List[ConversionMetrics] = []
        self.current_operation: Optional[str] = None
        self.start_time: Optional[float] = None
        self.start_memory: Optional[float] = None
        self.peak_memory: float = 0
        self.input_size = 0

    def start_profiling(self, operation_name: str, input_size: int = 0):
        """
        Start profiling an operation.

        Args:
            operation_name: Name of the operation
            input_size: Size of input data in bytes
        """
        self.current_operation = operation_name
        self.start_time = time.time()
        self.input_size = input_size
        self.start_memory = self._memory_mb()
        self.peak_memory = self.start_memory

        self.logger.debug(f"Started profiling: {operation_name}")

    def sample_performance(self):
        """Sample current memory usage."""
        if not self.current_operation:
            return

        try:
            self.peak_memory = max(self.peak_memory, self._memory_mb())
        except psutil.Error as e:
            self.logger.warning(f"Performance sampling failed: {e}")

    def stop_profiling(self, output_size: int = 0, events_processed: int = 0,
                       diagnostics_reported: int = 0) -> ConversionMetrics:
        """
        Stop profiling and return metrics.

        Args:
            output_size: Size of output in characters
            events_processed: Number of events the transcoder handled
            diagnostics_reported: Number of diagnostics reported

        Returns:
            ConversionMetrics with collected data
        """
        if not self.current_operation or not self.start_time:
            raise ValueError("No active profiling session")

        end_time = time.time()
        duration = end_time - self.start_time

        try:
            end_memory = self._memory_mb()
        except psutil.Error:
            end_memory = self.start_memory
        self.peak_memory = max(self.peak_memory, end_memory)

        throughput = (self.input_size / 1024 / 1024) / duration if duration > 0 else 0  # MB/s

        metrics = ConversionMetrics(
            operation_name=self.current_operation,
            start_time=self.start_time,
            end_time=end_time,
            duration=duration,
            input_size=self.input_size,
            output_size=output_size,
            memory_peak_mb=self.peak_memory,
            memory_start_mb=self.start_memory,
            memory_end_mb=end_memory,
            throughput_mbps=throughput,
            events_processed=events_processed,
            diagnostics_reported=diagnostics_reported
        )

        self.metrics_history.append(metrics)

        self.logger.info(f"Performance Summary - {self.current_operation}:")
        self.logger.info(f"  Duration: {duration:.3f}s")
        self.logger.info(f"  Throughput: {throughput:.2f} MB/s")
        self.logger.info(f"  Memory Peak: {self.peak_memory:.1f} MB")
        self.logger.info(f"  Events: {events_processed}")
        self.logger.info(f"  Diagnostics: {diagnostics_reported}")

        self.current_operation = None
        self.start_time = None
        self.start_memory = None

        return metrics

    def get_performance_summary(self) -> Dict[str, Any]:
        """
        Get summary of all recorded conversions.

        Returns:
            Dictionary with performance summary
        """
        if not self.metrics_history:
            return {"total_operations": 0}

        total_duration = sum(m.duration for m in self.metrics_history)
        total_input = sum(m.input_size for m in self.metrics_history)
        total_events = sum(m.events_processed for m in self.metrics_history)

        return {
            "total_operations": len(self.metrics_history),
            "total_duration": total_duration,
            "total_input_mb": total_input / 1024 / 1024,
            "total_events": total_events,
            "average_memory_peak_mb": sum(m.memory_peak_mb for m in self.metrics_history) / len(self.metrics_history),
            "operations": [
                {
                    "name": m.operation_name,
                    "duration": m.duration,
                    "throughput": m.throughput_mbps,
                }
                for m in self.metrics_history
            ]
        }

    @staticmethod
    def _memory_mb() -> float:
        return psutil.Process().memory_info().rss / 1024 / 1024
