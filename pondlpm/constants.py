"""Physical constants shared by the optics, heat and water modules."""
from __future__ import annotations
import math
from typing import Final

# Radiation
SIGMA: Final[float] = 5.67e-8          # W m⁻² K⁻⁴
KELVIN: Final[float] = 273.15

# Water
RHO_WATER: Final[float] = 1000.0       # kg m⁻³
CP_WATER: Final[float] = 4186.0        # J kg⁻¹ °C⁻¹
LAMBDA_WATER: Final[float] = 2.45      # MJ kg⁻¹, latent heat of vaporisation
EPSILON_WATER: Final[float] = 0.97     # longwave emissivity

# PAR conversion, W m⁻² → µmol m⁻² s⁻¹
F_PAR: Final[float] = 0.43
PAR_CONVERSION: Final[float] = 4.57
PAR_COMBINED: Final[float] = F_PAR * PAR_CONVERSION

# Optics
N_AIR: Final[float] = 1.0
N_WATER: Final[float] = 1.333
I_MIN_PAR: Final[float] = 1.0          # µmol m⁻² s⁻¹, compensation threshold
THETA_DIFFUSE_DEG: Final[float] = 60.0 # equivalent incidence for sky diffuse
T_NORMAL: Final[float] = 0.98          # transmission at normal incidence

# Heat transfer
H_COMBUSTION: Final[float] = 20.0      # MJ kg⁻¹ algal biomass
BOWEN_CONSTANT: Final[float] = 61.3    # Pa °C⁻¹
Z0_WATER: Final[float] = 0.001         # m, roughness length of open water
K_GROUND: Final[float] = 1.5           # W m⁻¹ °C⁻¹
D_GROUND: Final[float] = 0.5           # m

# Penman-type evaporation
H_EVAP: Final[float] = 6.43            # MJ m⁻² day⁻¹ kPa⁻¹
A_WIND: Final[float] = 1.0
B_WIND: Final[float] = 0.536
MCADAMS_A: Final[float] = 3.0          # W m⁻² °C⁻¹
MCADAMS_B: Final[float] = 4.2          # W m⁻² °C⁻¹ (m/s)⁻¹

# ln(2/z0) / ln(10/z0) ≈ 0.825
WIND_10_TO_2: Final[float] = math.log(2.0 / Z0_WATER) / math.log(10.0 / Z0_WATER)

SECONDS_PER_HOUR: Final[float] = 3600.0
SECONDS_PER_DAY: Final[float] = 86400.0
HOURS_PER_DAY: Final[int] = 24
LITERS_PER_M3: Final[float] = 1000.0
