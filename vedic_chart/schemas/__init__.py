from .charts import (
    AscendantOut,
    BodyOut,
    ChartInput,
    ChartOptions,
    ComputeRequest,
    ComputeResponse,
    HouseOut,
    MetaOut,
    NakshatraLookupOut,
    Place,
)

from .dashas import DashaComputeResponse, DashaPeriod
