# ---
# jupyter:
#   jupytext:
#     text_representation:
#       extension: .py
#       format_name: percent
#       format_version: '1.3'
#   kernelspec:
#     display_name: Python 3
#     language: python
#     name: python3
# ---

# %% [markdown]
# # 01 — Insulated Hot-Water Pipe Outdoors
#
# A 40 m insulated steel pipe carries hot water across a roof.  The
# outdoor temperature follows a daily cycle; the inlet temperature steps
# up when the boiler starts in the morning.
#
# Each section exchanges heat with the fluid inside and with the outdoor
# air through the insulation:
#
# $$C_f \frac{dT_f}{dt} = \dot m c\,(T_{f,k-1} - T_f)
#   + h_i A_i (T_p - T_f)$$
#
# $$C_p \frac{dT_p}{dt} = h_i A_i (T_f - T_p) + U_e A_o (T_{env} - T_p)$$
#
# **Model**: `pipeheat.physics.NearPipeSolver`

# %%
import pipeheat
from pipeheat import boundaries, materials, postprocess, time

pipeheat.setup_logging()

# %% [markdown]
# ## 1. Pipe Configuration
#
# | Layer           | Thickness | λ (W/(m K)) |
# |-----------------|-----------|-------------|
# | Fibreglass      | 25 mm     | 0.04        |
# | Steel pipe wall | 3 mm      | 45          |

# %%
config = pipeheat.PipeConfiguration.from_dict({
    "name": "roof main",
    "environment": "outdoor_air",
    "inner_diameter": 0.05,
    "length": 40.0,
    "construction": ["fiberglass", "steel"],
    "n_sections": 20,
})
print(config.geometry)
print(f"Insulation R: {config.geometry.construction.insulation_resistance:.3f} m² K/W")

# %% [markdown]
# ## 2. Weather and Inlet
#
# Outdoor air swings between −5 °C and 5 °C; the boiler supplies 70 °C
# from 06:00 and 40 °C overnight.

# %%
outdoor = boundaries.Schedule(
    times=[0, 6, 14, 24], values=[-5.0, -3.0, 5.0, -5.0], period=24,
)
inlet = boundaries.Schedule(
    times=[0, 5.99, 6, 24], values=[40.0, 40.0, 70.0, 70.0], period=24,
)

# %% [markdown]
# ## 3. Simulate One Day with 15-minute Steps

# %%
controller = pipeheat.TimeIntegrationController(config, fluid=materials.Water())
controller.begin_environment(day=1)

history = postprocess.ReportHistory()
for sim_time, dt, day in time.Stepper(hours=24, dt=900):
    ambient = boundaries.AmbientConditions(outdoor_dry_bulb=outdoor(sim_time), wind_speed=4.0)
    history.append(controller.simulate(pipeheat.HostInputs(
        sim_time=sim_time,
        time_step=dt,
        inlet_temperature=inlet(sim_time),
        mass_flow_rate=0.25,
        day_of_sim=day,
        ambient=ambient,
    )))

loss = history["environment_heat_loss_energy"].sum() / 3.6e6
print(f"{len(history)} steps, heat lost to outdoors: {loss:.2f} kWh")

# %% [markdown]
# ## 4. Inlet and Outlet Temperatures

# %%
import matplotlib.pyplot as plt
from pipeheat import visualization

fig, (ax1, ax2) = plt.subplots(1, 2, figsize=(12, 4))
visualization.plot_history(history, ax=ax1)
visualization.plot_pipe_profile(controller.state, config.geometry,
                                title="Profile at end of day", ax=ax2)
plt.tight_layout()
plt.show()

# %% [markdown]
# ## 5. Steady-State Check
#
# With constant conditions the outlet settles on the closed-form
# sectioned solution.

# %%
from pipeheat.physics import StepContext
from pipeheat.solvers import AnalyticalPipe

ctx = StepContext.from_fluid(materials.Water(), 70.0, 0.25, ambient=ambient)
near_pipe = controller.near_pipe
ua = AnalyticalPipe.section_conductance(
    near_pipe.inside_coefficient(ctx) * config.geometry.inside_area,
    near_pipe.environment_coefficient(ctx) * config.geometry.outside_area,
)
steady = AnalyticalPipe.discrete_outlet(70.0, ambient.outdoor_dry_bulb, ua,
                                        ctx.capacity_rate, config.n_sections)
print(f"Steady outlet: {steady:.3f} °C, last computed: "
      f"{history['fluid_outlet_temperature'][-1]:.3f} °C")

history.export_csv("roof_main.csv")

# %% [markdown]
# ## Key Takeaways
#
# - The insulation resistance dominates the loss; the outside film
#   coefficient barely matters once R ≈ 1 m² K/W.
# - The outlet lags the inlet step by roughly the fluid transit time.
# - Example 02 buries the same kind of pipe in soil.
