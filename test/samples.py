"""Shared KiCad snippets for the test modules."""

SAMPLE_PCB = '''(kicad_pcb
	(version 20240108)
	(generator "pcbnew")
	(generator_version "8.0")
	(general
		(thickness 1.6)
		(legacy_teardrops no)
	)
	(paper "A4")
	(layers
		(0 "F.Cu" signal)
		(31 "B.Cu" signal)
		(32 "B.Adhes" user "B.Adhesive")
		(44 "Edge.Cuts" user)
	)
	(setup
		(pad_to_mask_clearance 0)
		(pcbplotparams (layerselection 0x00010fc_ffffffff))
	)
	(net 0 "")
	(net 1 "GND")
	(net 2 "VCC")
	(footprint "Resistor_SMD:R_0603_1608Metric"
		(layer "F.Cu")
		(uuid "a1b2c3")
		(at 100.5 50.25 90)
		(property "Reference" "R1"
			(at 0 -1.43 90)
			(layer "F.SilkS")
			(effects (font (size 1 1) (thickness 0.15)))
		)
		(property "Value" "10k" (at 0 1.43 90) (layer "F.Fab"))
		(attr smd)
		(fp_line (start -0.8 -0.4) (end 0.8 -0.4) (stroke (width 0.1) (type solid)) (layer "F.Fab"))
		(fp_text user "${REFERENCE}" (at 0 0 90) (layer "F.Fab")
			(effects (font (size 0.4 0.4) (thickness 0.06) bold))
		)
		(pad "1" smd roundrect (at -0.825 0 90) (size 0.8 0.95) (layers "F.Cu" "F.Paste" "F.Mask")
			(roundrect_rratio 0.25) (net 1 "GND") (uuid "p1"))
		(pad "2" smd roundrect (at 0.825 0 90) (size 0.8 0.95) (layers "F.Cu" "F.Paste" "F.Mask")
			(roundrect_rratio 0.25) (net 2 "VCC"))
		(model "${KICAD8_3DMODEL_DIR}/Resistor_SMD.3dshapes/R_0603_1608Metric.wrl"
			(offset (xyz 0 0 0))
			(scale (xyz 1 1 1))
		)
	)
	(footprint "Connector:Pin_1" locked
		(layer "B.Cu")
		(at 10 20)
		(pad "1" thru_hole circle (at 0 0) (size 1.7 1.7) (drill 1.0) (layers "*.Cu" "*.Mask"))
		(pad "" np_thru_hole oval (at 2 0) (size 1 2) (drill oval 1 2) (layers "*.Cu"))
	)
	(gr_line (start 0 0) (end 100 0) (stroke (width 0.05) (type default)) (layer "Edge.Cuts") (uuid "e1"))
	(gr_line (start 100 0) (end 100 50) (stroke (width 0.05) (type default)) (layer "Edge.Cuts") (uuid "e2"))
	(gr_line (start 100 50) (end 0 50) (stroke (width 0.05) (type default)) (layer "Edge.Cuts") (uuid "e3"))
	(gr_line (start 0 50) (end 0 0) (stroke (width 0.05) (type default)) (layer "Edge.Cuts") (uuid "e4"))
	(gr_circle (center 50 25) (end 53 29) (stroke (width 0.1) (type solid)) (fill none) (layer "F.SilkS"))
	(gr_text "REV A" (at 10 45 0) (layer "F.SilkS")
		(effects (font (size 1.5 1.5) (thickness 0.3) (bold yes)) (justify left bottom))
	)
	(segment (start 100.5 50.25) (end 110 50.25) (width 0.25) (layer "F.Cu") (net 1) (uuid "s1"))
	(segment (start 110 50.25) (end 110 60) (width 0.25) (layer "F.Cu") (net 5) (uuid "s2"))
	(via (at 110 60) (size 0.8) (drill 0.4) (layers "F.Cu" "B.Cu") (net 2) (uuid "v1"))
	(zone (net 1) (net_name "GND") (layer "B.Cu") (uuid "z1") (hatch edge 0.5)
		(priority 2)
		(connect_pads (clearance 0.5))
		(min_thickness 0.25)
		(fill yes (thermal_gap 0.5))
		(polygon (pts (xy 0 0) (xy 100 0) (xy 100 50) (xy 0 50)))
		(filled_polygon (layer "B.Cu") (pts (xy 1 1) (xy 99 1) (xy 99 49)))
	)
	(embedded_fonts no)
)
'''

# KiCad 5 style: bare layer names, tstamp, module and fp_text reference.
LEGACY_PCB = '''(kicad_pcb (version 20171130) (host pcbnew 5.1.9)
  (general (thickness 1.6) (drawings 1) (tracks 0) (modules 1))
  (page A4)
  (layers
    (0 F.Cu signal)
    (31 B.Cu signal)
    (44 Edge.Cuts user)
  )
  (net 0 "")
  (net 1 /SIG)
  (module Resistor_SMD:R_0805 (layer F.Cu) (tedit 5F68FEEE) (tstamp 5E3F1A2B)
    (at 25.4 30.48 180)
    (fp_text reference R7 (at 0 -1.65) (layer F.SilkS)
      (effects (font (size 1 1) (thickness 0.15)))
    )
    (fp_text value 4k7 (at 0 1.65) (layer F.Fab)
      (effects (font (size 1 1) (thickness 0.15)))
    )
    (pad 1 smd rect (at -0.95 0 180) (size 1 1.3) (layers F.Cu F.Paste F.Mask)
      (net 1 /SIG))
  )
  (gr_arc (start 0 0) (end 10 0) (angle 90) (layer Edge.Cuts) (width 0.1))
  (segment (start 1 1) (end 2 2) (width 0.25) (layer F.Cu) (net 1))
)
'''

SAMPLE_LIB = '''(kicad_symbol_lib
	(version 20231120)
	(generator "kicad_symbol_editor")
	(symbol "R"
		(pin_numbers hide)
		(exclude_from_sim no)
		(property "Reference" "R" (at 2.032 0 90) (effects (font (size 1.27 1.27))))
		(property "Value" "R" (at 0 0 90))
		(property "Description" "Resistor" (at 0 0 0) (effects (font (size 1.27 1.27)) (hide yes)))
		(property "ki_keywords" "R res resistor" (at 0 0 0))
		(symbol "R_0_1"
			(rectangle (start -1.016 -2.54) (end 1.016 2.54)
				(stroke (width 0.254) (type default)) (fill (type none)))
		)
		(symbol "R_1_1"
			(pin passive line (at 0 3.81 270) (length 1.27)
				(name "~" (effects (font (size 1.27 1.27))))
				(number "1" (effects (font (size 1.27 1.27)))))
		)
	)
	(symbol "LED_0603"
		(property "Reference" "D" (at 0 2.54 0))
		(property "Description" "red LED" (at 0 0 0))
	)
	(symbol "LED_0805"
		(property "Description" "green LED" (at 0 0 0))
	)
	(symbol "C"
		(property "Reference" "C" (at 0 0 0))
	)
)
'''
