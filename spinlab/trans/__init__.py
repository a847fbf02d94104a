"""Package to transform the data.

The modules in this package transform one vector of data into another vector
(filtered signal, feature) or into the detection threshold. Use the package
"detect" to go from the transformed data to events.

"""
from .filter import WindowedFIR, EquirippleFIR, filter_zero_phase, remezord
from .feature import fixed_rms, sliding_rms, wavelet_energy, moving_avg
from .baseline import (PercentileOfRMS, StdMultiplier, MeanEnergyMultiplier,
                       find_baseline, filter_baseline, estimate_threshold)
