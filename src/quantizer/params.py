from dataclasses import dataclass, field


@dataclass
class QuantizeParams:
    k: int = 0  # target cluster count; 0 = MST only, no recolor
    representative: str = "mean"  # mean|median


@dataclass
class LoggingParams:
    level: str = "WARNING"


@dataclass
class PipelineParams:
    quantize: QuantizeParams = field(default_factory=QuantizeParams)
    logging: LoggingParams = field(default_factory=LoggingParams)
